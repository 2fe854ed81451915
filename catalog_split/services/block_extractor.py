from __future__ import annotations

from enum import Enum
from typing import List

from catalog_split.domain.errors import MalformedInputError

SLUG_MARKER = "slug:"

_CLOSERS = {"{": "}", "[": "]"}
_NAMES = {"{": "object", "[": "array"}


class QuoteMode(Enum):
    NONE = ""
    SINGLE = "'"
    DOUBLE = '"'
    TEMPLATE = "`"


_QUOTE_MODES = {m.value: m for m in QuoteMode if m is not QuoteMode.NONE}


def find_matching_close(text: str, start: int) -> int:
    """
    Returns the index of the delimiter that closes the '{' or '[' at `start`.

    Only the opener's own pair is counted. Characters inside '...', "..." and
    `...` are opaque; a backslash inside a string consumes the next character.
    `${...}` inside a template literal is not parsed.
    """
    opener = text[start]
    closer = _CLOSERS[opener]

    depth = 1
    quote = QuoteMode.NONE
    quote_start = -1
    escape_next = False

    i = start + 1
    n = len(text)
    while i < n:
        c = text[i]
        if escape_next:
            escape_next = False
        elif quote is not QuoteMode.NONE:
            if c == "\\":
                escape_next = True
            elif c == quote.value:
                quote = QuoteMode.NONE
        elif c in _QUOTE_MODES:
            quote = _QUOTE_MODES[c]
            quote_start = i
        elif c == opener:
            depth += 1
        elif c == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1

    if quote is not QuoteMode.NONE:
        raise MalformedInputError(
            start,
            f"unterminated {quote.name.lower()}-quoted string in {_NAMES[opener]}",
            quote_offset=quote_start,
        )
    raise MalformedInputError(start, f"unterminated {_NAMES[opener]}")


def _skip_separator(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i].isspace():
        i += 1
    if i < n and text[i] == ",":
        i += 1
    return i


def extract_blocks(text: str, *, strict: bool = True) -> List[str]:
    """
    Splits the body of a manufacturers array into its top-level object literals.

    Blocks come back trimmed, in source order, and only if they contain
    "slug:". With strict=True an unterminated object raises
    MalformedInputError; with strict=False scanning stops there and the
    blocks closed so far are returned.
    """
    blocks: List[str] = []
    text = text or ""
    i = 0
    while True:
        start = text.find("{", i)
        if start < 0:
            break

        try:
            end = find_matching_close(text, start)
        except MalformedInputError:
            if strict:
                raise
            break

        i = _skip_separator(text, end + 1)

        block = text[start:end + 1].strip()
        if SLUG_MARKER in block:
            blocks.append(block)

    return blocks
