from .errors import ArrayNotFoundError, CatalogSplitError, MalformedInputError
from .models import BlockFailure, SplitResult, WrittenModule

__all__ = [
    "ArrayNotFoundError",
    "CatalogSplitError",
    "MalformedInputError",
    "BlockFailure",
    "SplitResult",
    "WrittenModule",
]
