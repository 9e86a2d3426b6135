# -*- coding: utf-8 -*-
"""
svgfontdump/glyphs.py

Glyph loaders. Both source formats end up as the same GlyphRecord list:

  SVG font (.svg)
    <font horiz-adv-x> / <font-face ascent units-per-em> / <glyph d unicode glyph-name horiz-adv-x>
    Paths are in font space (y up, baseline at 0, units-per-em). They are moved
    so the ascent line is y=0, flipped to y down and scaled to a 1000 unit em.

  Fontello config (anything else, JSON)
    {"glyphs": [{"css", "code", "uid", "search", "svg": {"path", "width"}}]}
    Paths are already in image space on a 1000 unit em, they are only normalized.

Glyphs without a drawable path are dropped here and never reach the dumper.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from .codepoints import MAX_CODE_POINT, from_char_code
from .errors import MalformedSource
from .pathdata import PATH_PRECISION, PathData, PathDataError, normalize, to_fixed


TARGET_EM = 1000
DEFAULT_UNITS_PER_EM = 1000.0


# -----------------------------
# Data structures
# -----------------------------
@dataclass
class GlyphRecord:
    path_data: str
    width: str  # advance on the 1000 unit em, one decimal ("500.0")
    unicode: str  # UTF-16 text, decoded to a code point by the dumper
    name: str
    height: int = TARGET_EM
    uid: Optional[str] = None
    search: List[str] = field(default_factory=list)


class SourceFormat(Enum):
    SVG_FONT = "svg"
    FONTELLO_JSON = "json"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceFormat":
        if Path(path).suffix.lower() == ".svg":
            return cls.SVG_FONT
        return cls.FONTELLO_JSON


# -----------------------------
# SVG font
# -----------------------------
def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _find_all(root: ET.Element, name: str) -> List[ET.Element]:
    return [el for el in root.iter() if isinstance(el.tag, str) and local_name(el.tag) == name]


def _number(value: str, what: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise MalformedSource(f"Invalid {what}: {value!r}") from e


def load_svg_font(text: str) -> List[GlyphRecord]:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedSource(f"Not a valid SVG document: {e}") from e

    fonts = _find_all(root, "font")
    faces = _find_all(root, "font-face")
    if not fonts:
        raise MalformedSource("No <font> element in SVG font")
    if not faces:
        raise MalformedSource("No <font-face> element in SVG font")
    font, face = fonts[0], faces[0]

    font_horiz_adv_x = font.attrib.get("horiz-adv-x")
    ascent = _number(face.attrib.get("ascent") or "0", "ascent")
    units_per_em = _number(face.attrib.get("units-per-em") or str(DEFAULT_UNITS_PER_EM), "units-per-em")
    if units_per_em <= 0:
        raise MalformedSource(f"Invalid units-per-em: {units_per_em}")
    scale = TARGET_EM / units_per_em

    result: List[GlyphRecord] = []
    for el in _find_all(root, "glyph"):
        d = el.attrib.get("d")
        # No outline (space and friends): nothing to draw.
        if not d:
            continue
        unicode = el.attrib.get("unicode")
        if not unicode:
            continue

        name = el.attrib.get("glyph-name") or f"glyph{unicode}"
        width = el.attrib.get("horiz-adv-x") or font_horiz_adv_x
        if width is None:
            raise MalformedSource(f"Glyph {name!r} has no horiz-adv-x and the font defines none")

        try:
            path = PathData(d).translate(0, -ascent).scale(scale, -scale)
            path_data = normalize(path, PATH_PRECISION)
        except PathDataError as e:
            raise MalformedSource(f"Glyph {name!r}: {e}") from e

        result.append(
            GlyphRecord(
                path_data=path_data,
                width=to_fixed(_number(width, "horiz-adv-x") * scale, 1),
                unicode=unicode,
                name=name,
            )
        )

    return result


# -----------------------------
# Fontello config
# -----------------------------
def load_fontello(data: Dict) -> List[GlyphRecord]:
    glyphs = data.get("glyphs") if isinstance(data, dict) else None
    if not isinstance(glyphs, list):
        raise MalformedSource("Fontello config has no 'glyphs' list")

    result: List[GlyphRecord] = []
    for entry in glyphs:
        svg = entry.get("svg")
        if not (svg and svg.get("path")):
            continue

        code = entry.get("code")
        if not isinstance(code, int):
            raise MalformedSource(f"Glyph {entry.get('css')!r} has no numeric 'code'")
        if not 0 <= code <= MAX_CODE_POINT:
            raise MalformedSource(f"Glyph {entry.get('css')!r} has code {code} outside the Unicode range")
        name = entry.get("css") or f"glyph{code}"

        width = svg.get("width")
        if not isinstance(width, (int, float)):
            raise MalformedSource(f"Glyph {name!r} has no numeric svg width")

        try:
            path_data = normalize(PathData(svg["path"]), PATH_PRECISION)
        except PathDataError as e:
            raise MalformedSource(f"Glyph {name!r}: {e}") from e

        result.append(
            GlyphRecord(
                path_data=path_data,
                width=to_fixed(width, 1),
                unicode=from_char_code(code),
                name=name,
                uid=entry.get("uid"),
                search=list(entry.get("search") or []),
            )
        )

    return result


def load_glyphs(text: str, fmt: SourceFormat) -> List[GlyphRecord]:
    if fmt is SourceFormat.SVG_FONT:
        return load_svg_font(text)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSource(f"Not a valid JSON document: {e}") from e
    return load_fontello(data)
