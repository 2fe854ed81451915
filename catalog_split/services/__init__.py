from .array_locator import locate_array_body
from .block_extractor import QuoteMode, extract_blocks, find_matching_close
from .module_renderer import ModuleRenderer, TypeScriptModuleRenderer
from .split_service import SplitService

__all__ = [
    "locate_array_body",
    "QuoteMode",
    "extract_blocks",
    "find_matching_close",
    "ModuleRenderer",
    "TypeScriptModuleRenderer",
    "SplitService",
]
