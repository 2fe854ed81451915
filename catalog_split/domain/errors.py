from __future__ import annotations

from typing import Optional


class CatalogSplitError(Exception):
    """Base class for errors raised while splitting a catalog source."""


class MalformedInputError(CatalogSplitError, ValueError):
    """
    An object/array (or a string inside it) was opened but never closed.
    `offset` is the index of the unterminated opening delimiter.
    """

    def __init__(self, offset: int, reason: str = "unterminated object", quote_offset: Optional[int] = None):
        self.offset = offset
        self.reason = reason
        self.quote_offset = quote_offset
        msg = f"{reason} at offset {offset}"
        if quote_offset is not None:
            msg += f" (string opened at offset {quote_offset})"
        super().__init__(msg)


class ArrayNotFoundError(CatalogSplitError, LookupError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No '{key}: [' array found in source")
