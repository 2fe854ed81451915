from __future__ import annotations

import re

from catalog_split.domain.errors import ArrayNotFoundError
from catalog_split.services.block_extractor import find_matching_close


def locate_array_body(text: str, key: str = "manufacturers") -> str:
    """Returns the text between `<key>: [` and its matching `]`, brackets excluded."""
    m = re.search(r"\b" + re.escape(key) + r"\s*[:=]\s*\[", text or "")
    if not m:
        raise ArrayNotFoundError(key)

    open_idx = m.end() - 1
    close_idx = find_matching_close(text, open_idx)
    return text[open_idx + 1:close_idx]
