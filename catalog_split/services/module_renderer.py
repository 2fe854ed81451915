import re
from dataclasses import dataclass
from typing import Optional

_SLUG_RE = re.compile(r"\bslug\s*:\s*(['\"`])((?:\\.|(?!\1).)*)\1", re.DOTALL)
_SAFE_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def extract_slug(block: str) -> Optional[str]:
    m = _SLUG_RE.search(block or "")
    if not m:
        return None
    slug = m.group(2).strip()
    return slug or None


def is_safe_slug(slug: str) -> bool:
    return bool(_SAFE_SLUG_RE.match(slug or "")) and ".." not in slug


def slug_to_identifier(slug: str) -> str:
    ident = re.sub(r"[^A-Za-z0-9_$]", "_", slug or "")
    if not ident or ident[0].isdigit():
        ident = "_" + ident
    return ident


class ModuleRenderer:
    """Strategy interface."""
    extension: str = ""

    def filename_for(self, slug: str) -> str:
        return f"{slug}.{self.extension}" if self.extension else slug

    def render(self, identifier: str, block: str) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class TypeScriptModuleRenderer(ModuleRenderer):
    extension: str = "ts"
    type_name: str = "Manufacturer"
    type_import: str = "../productTypes"

    def render(self, identifier: str, block: str) -> str:
        type_name = (self.type_name or "").strip()
        lines = []
        if type_name and (self.type_import or "").strip():
            lines += [f"import {{ {type_name} }} from '{self.type_import.strip()}';", ""]

        annotation = f": {type_name}" if type_name else ""
        lines += [
            f"export const {identifier}{annotation} = {block.strip()};",
            "",
            f"export default {identifier};",
            "",
        ]
        return "\n".join(lines)
