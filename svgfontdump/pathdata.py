# -*- coding: utf-8 -*-
"""
svgfontdump/pathdata.py

SVG path data: parse, transform, absolute/relative conversion, rounding and
compact serialization.

Segments are kept as plain lists, `[command, *params]`, one per drawing
command (implicit repetitions are split into their own segments). Affine
operations are queued and composed with fontTools' Transform, then applied
lazily the next time the segments are read. Applying a transform leaves the
path in absolute commands.

Typical use (what both glyph loaders do):

    d = normalize(PathData(raw).translate(0, -ascent).scale(k, -k))
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Tuple

from fontTools.misc.transform import Identity, Transform


Segment = list

PARAM_COUNTS: Dict[str, int] = {
    "a": 7,
    "c": 6,
    "h": 1,
    "l": 2,
    "m": 2,
    "q": 4,
    "s": 4,
    "t": 2,
    "v": 1,
    "z": 0,
}

NUM_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
SEPARATORS = " \t\n\r\f\v,"
NUMBER_START = "+-.0123456789"

# Digits after the decimal point in normalized output.
PATH_PRECISION = 1

EPSILON = 1e-10


class PathDataError(ValueError):
    pass


# -----------------------------
# Number helpers
# -----------------------------
def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text of `value`, ties rounded away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def _fixed(value: float, digits: int) -> float:
    return float(to_fixed(value, digits))


def format_number(value) -> str:
    if isinstance(value, int):
        return str(value)
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return repr(value)


# -----------------------------
# Parsing
# -----------------------------
def _skip_separators(d: str, i: int) -> int:
    while i < len(d) and d[i] in SEPARATORS:
        i += 1
    return i


def parse_path(d: str) -> List[Segment]:
    segments: List[Segment] = []
    n = len(d)
    i = _skip_separators(d, 0)

    while i < n:
        cmd = d[i]
        kind = cmd.lower()
        if kind not in PARAM_COUNTS:
            raise PathDataError(f"Unexpected path data at {i}: {d[i:i + 20]!r}")
        if not segments and kind != "m":
            raise PathDataError(f"Path data must start with a moveto, got {cmd!r}")
        i += 1

        count = PARAM_COUNTS[kind]
        if count == 0:
            segments.append([cmd])
            i = _skip_separators(d, i)
            continue

        while True:
            params: list = []
            for k in range(count):
                i = _skip_separators(d, i)
                if kind == "a" and k in (3, 4):
                    # Flags are a single digit and may be packed: "a1 1 0 00.5.5"
                    if i < n and d[i] in "01":
                        params.append(int(d[i]))
                        i += 1
                        continue
                    raise PathDataError(f"Expected arc flag at {i}: {d[i:i + 20]!r}")
                m = NUM_RE.match(d, i)
                if not m:
                    raise PathDataError(f"Expected number at {i}: {d[i:i + 20]!r}")
                params.append(float(m.group(0)))
                i = m.end()
            segments.append([cmd, *params])

            i = _skip_separators(d, i)
            if i >= n or d[i] not in NUMBER_START:
                break
            # Extra coordinate pairs after a moveto are implicit linetos.
            if kind == "m":
                cmd = "l" if cmd == "m" else "L"

    return segments


# -----------------------------
# Geometry helpers
# -----------------------------
def _advance(seg: Segment, x: float, y: float, sx: float, sy: float) -> Tuple[float, float, float, float]:
    """Current point and subpath start after `seg`."""
    cmd = seg[0]
    kind = cmd.lower()
    relative = cmd == kind

    if kind == "z":
        return sx, sy, sx, sy
    if kind == "h":
        x = x + seg[1] if relative else seg[1]
    elif kind == "v":
        y = y + seg[1] if relative else seg[1]
    else:
        x = x + seg[-2] if relative else seg[-2]
        y = y + seg[-1] if relative else seg[-1]

    if kind == "m":
        sx, sy = x, y
    return x, y, sx, sy


def transform_ellipse(rx: float, ry: float, angle: float, m: Tuple[float, float, float, float]) -> Tuple[float, float, float]:
    """
    Image of the ellipse (rx, ry, x-axis rotation in degrees) under the linear
    part (xx, xy, yx, yy) of an affine matrix. Returns (rx, ry, angle).

    The ellipse is the unit circle mapped by M = m * rotate(angle) * scale(rx, ry);
    its new axes are the square roots of the eigenvalues of M * M^T.
    """
    a, b, c, d = m
    rad = math.radians(angle)
    cos, sin = math.cos(rad), math.sin(rad)

    ma0 = rx * (a * cos + c * sin)
    ma1 = rx * (b * cos + d * sin)
    ma2 = ry * (-a * sin + c * cos)
    ma3 = ry * (-b * sin + d * cos)

    j = ma0 * ma0 + ma2 * ma2
    k = ma1 * ma1 + ma3 * ma3
    l = ma0 * ma1 + ma2 * ma3
    mean = (j + k) / 2.0

    disc = (j - k) * (j - k) + 4.0 * l * l
    if disc < EPSILON * mean:
        r = math.sqrt(mean)
        return r, r, 0.0

    root = math.sqrt(disc)
    l1 = mean + root / 2.0
    l2 = max(0.0, mean - root / 2.0)

    if abs(l) < EPSILON and abs(l1 - k) < EPSILON:
        ax = 90.0
    elif abs(l) > abs(l1 - k):
        ax = math.degrees(math.atan((l1 - j) / l))
    else:
        ax = math.degrees(math.atan(l / (l1 - k)))

    if ax >= 0:
        return math.sqrt(l1), math.sqrt(l2), ax
    return math.sqrt(l2), math.sqrt(l1), ax + 90.0


def _transform_arc(seg: Segment, matrix: Transform, x: float, y: float) -> Segment:
    _, rx, ry, angle, large, sweep, ex, ey = seg
    px, py = matrix.transformPoint((ex, ey))

    # Empty or flat arcs become lines so the following S/T still has a segment to follow.
    if (ex == x and ey == y) or rx == 0 or ry == 0:
        return ["L", px, py]

    xx, xy, yx, yy, _, _ = matrix
    nrx, nry, nangle = transform_ellipse(abs(rx), abs(ry), angle, (xx, xy, yx, yy))
    if nrx < EPSILON * nry or nry < EPSILON * nrx:
        return ["L", px, py]

    if xx * yy - xy * yx < 0:
        sweep = 0 if sweep else 1
    return ["A", nrx, nry, nangle, large, sweep, px, py]


# -----------------------------
# Path object
# -----------------------------
class PathData:
    def __init__(self, d: str) -> None:
        self.segments: List[Segment] = parse_path(d)
        self._matrix: Transform = Identity

    def __repr__(self) -> str:
        return f"PathData({str(self)!r})"

    # Affine operations, applied to points in the order they are called.
    def translate(self, dx: float, dy: float = 0.0) -> "PathData":
        self._matrix = self._matrix.reverseTransform(Transform(1, 0, 0, 1, dx, dy))
        return self

    def scale(self, sx: float, sy: Optional[float] = None) -> "PathData":
        if sy is None:
            sy = sx
        self._matrix = self._matrix.reverseTransform(Transform(sx, 0, 0, sy, 0, 0))
        return self

    def _evaluate(self) -> None:
        if self._matrix == Identity:
            return

        matrix = self._matrix
        self._matrix = Identity
        self._to_absolute()

        xx, xy, yx, yy, dx, dy = matrix
        x = y = sx = sy = 0.0
        result: List[Segment] = []

        for seg in self.segments:
            cmd = seg[0]
            if cmd == "H":
                if xy == 0:
                    out = ["H", xx * seg[1] + yx * y + dx]
                else:
                    out = ["L", *matrix.transformPoint((seg[1], y))]
            elif cmd == "V":
                if yx == 0:
                    out = ["V", xy * x + yy * seg[1] + dy]
                else:
                    out = ["L", *matrix.transformPoint((x, seg[1]))]
            elif cmd == "A":
                out = _transform_arc(seg, matrix, x, y)
            elif cmd == "Z":
                out = ["Z"]
            else:
                out = [cmd]
                for k in range(1, len(seg), 2):
                    out.extend(matrix.transformPoint((seg[k], seg[k + 1])))

            x, y, sx, sy = _advance(seg, x, y, sx, sy)
            result.append(out)

        self.segments = result

    def _to_absolute(self) -> None:
        x = y = sx = sy = 0.0
        for seg in self.segments:
            cmd = seg[0]
            kind = cmd.lower()
            if cmd == kind:
                if kind == "h":
                    seg[1] += x
                elif kind == "v":
                    seg[1] += y
                elif kind == "a":
                    seg[6] += x
                    seg[7] += y
                else:
                    for k in range(1, len(seg)):
                        seg[k] += x if k % 2 else y
                seg[0] = cmd.upper()
            x, y, sx, sy = _advance(seg, x, y, sx, sy)

    def abs(self) -> "PathData":
        self._evaluate()
        self._to_absolute()
        return self

    def rel(self) -> "PathData":
        self._evaluate()
        x = y = sx = sy = 0.0
        for index, seg in enumerate(self.segments):
            cmd = seg[0]
            kind = cmd.lower()
            # The opening moveto stays absolute.
            if cmd != kind and not (index == 0 and cmd == "M"):
                if kind == "h":
                    seg[1] -= x
                elif kind == "v":
                    seg[1] -= y
                elif kind == "a":
                    seg[6] -= x
                    seg[7] -= y
                else:
                    for k in range(1, len(seg)):
                        seg[k] -= x if k % 2 else y
                seg[0] = kind
            x, y, sx, sy = _advance(seg, x, y, sx, sy)
        return self

    def round(self, digits: int = 0) -> "PathData":
        """
        Round coordinates to `digits` decimals.

        For relative segments the error dropped at one end point is added to
        the next one, so rounding does not accumulate along a contour.
        """
        self._evaluate()
        dx = dy = 0.0
        start_dx = start_dy = 0.0

        for seg in self.segments:
            cmd = seg[0]
            kind = cmd.lower()
            relative = cmd == kind

            if kind == "z":
                dx, dy = start_dx, start_dy
            elif kind == "h":
                if relative:
                    seg[1] += dx
                dx = seg[1] - _fixed(seg[1], digits)
                seg[1] = _fixed(seg[1], digits)
            elif kind == "v":
                if relative:
                    seg[1] += dy
                dy = seg[1] - _fixed(seg[1], digits)
                seg[1] = _fixed(seg[1], digits)
            elif kind == "a":
                if relative:
                    seg[6] += dx
                    seg[7] += dy
                dx = seg[6] - _fixed(seg[6], digits)
                dy = seg[7] - _fixed(seg[7], digits)
                seg[1] = _fixed(seg[1], digits)
                seg[2] = _fixed(seg[2], digits)
                seg[3] = _fixed(seg[3], digits + 2)
                seg[6] = _fixed(seg[6], digits)
                seg[7] = _fixed(seg[7], digits)
            else:
                if relative:
                    seg[-2] += dx
                    seg[-1] += dy
                dx = seg[-2] - _fixed(seg[-2], digits)
                dy = seg[-1] - _fixed(seg[-1], digits)
                for k in range(1, len(seg)):
                    seg[k] = _fixed(seg[k], digits)
                if kind == "m":
                    start_dx, start_dy = dx, dy
        return self

    def __str__(self) -> str:
        self._evaluate()
        out: List[str] = []
        prev = ""

        for seg in self.segments:
            cmd = seg[0]
            skipped = False
            if cmd != prev or cmd in "mM":
                out.append(cmd)
            else:
                skipped = True

            for pos, val in enumerate(seg[1:], start=1):
                # A separator is only needed before non-negative numbers.
                if pos == 1:
                    if skipped and val >= 0:
                        out.append(" ")
                elif val >= 0:
                    out.append(" ")
                out.append(format_number(val))
            prev = cmd

        return "".join(out)


def normalize(path: PathData, digits: int = PATH_PRECISION) -> str:
    """Absolute, rounded, relative, rounded again: compact deterministic output."""
    return str(path.abs().round(digits).rel().round(digits))
