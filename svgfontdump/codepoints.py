# -*- coding: utf-8 -*-
"""
svgfontdump/codepoints.py

UTF-16 aware conversion between glyph `unicode` text and integer code points.

SVG fonts store a glyph's character as attribute text, Fontello configs store
it as an integer. Both loaders hand the engine text, and the engine turns it
back into an integer here, so astral characters (above U+FFFF) are handled by
one code path: their UTF-16 form is a high/low surrogate pair.
"""

from __future__ import annotations

from typing import List


HIGH_SURROGATE = 0xD800
LOW_SURROGATE = 0xDC00
SURROGATE_MASK = 0xFC00
MAX_CODE_POINT = 0x10FFFF


def utf16_units(text: str) -> List[int]:
    """Return the UTF-16 code units of `text` (lone surrogates pass through)."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def char_code_at(text: str) -> int:
    """
    Decode the first character of `text` to a code point.

    A leading high/low surrogate pair is combined into one scalar; anything
    else (including an unpaired surrogate) decodes as its first code unit.
    """
    units = utf16_units(text)
    if not units:
        raise ValueError("Cannot decode a code point from empty text")

    first = units[0]
    if len(units) >= 2:
        second = units[1]
        if (first & SURROGATE_MASK) == HIGH_SURROGATE and (second & SURROGATE_MASK) == LOW_SURROGATE:
            return 0x10000 + ((first - HIGH_SURROGATE) << 10) + (second - LOW_SURROGATE)
    return first


def from_char_code(code: int) -> str:
    """Encode a code point as text, going through a surrogate pair above U+FFFF."""
    if code > 0xFFFF:
        code -= 0x10000
        units = [HIGH_SURROGATE + (code >> 10), LOW_SURROGATE + (code & 0x3FF)]
    else:
        units = [code]
    raw = b"".join(u.to_bytes(2, "little") for u in units)
    return raw.decode("utf-16-le", "surrogatepass")
