from .module_repository import ModuleRepository

__all__ = [
    "ModuleRepository",
]
