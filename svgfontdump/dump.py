# -*- coding: utf-8 -*-
"""
svgfontdump/dump.py

Reconcile loaded glyphs against a prior mapping and write one SVG per glyph.

For every glyph, in source order:
  - decode its unicode text to a code point
  - classify it against the prior mapping: SKIP (known), OVERRIDE (known, --force)
    or NEW
  - render a minimal <svg><path/></svg> document and pick a file name
  - NEW glyphs are also recorded in the diff, which can be written as the
    mapping for the next run

Writes run on a thread pool once every glyph has been classified. Writes to
the same file share one task, in source order. The diff is assembled from the
plan afterwards, so it keeps source order whatever order the writes finish in.
"""

from __future__ import annotations

import secrets
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union
from xml.sax.saxutils import quoteattr

from .codepoints import char_code_at
from .errors import (
    ConfigUnreadable,
    GlyphWriteError,
    MalformedSource,
    OutputDirUncreatable,
    SourceUnreadable,
)
from .glyphs import GlyphRecord, SourceFormat, load_glyphs
from .mapping import load_config, write_diff_config


FILENAME_PREFIX = "glyph__"
SVG_NS = "http://www.w3.org/2000/svg"


# -----------------------------
# Data structures
# -----------------------------
class Action(Enum):
    SKIP = "skip"
    OVERRIDE = "override"
    NEW = "new"


@dataclass(frozen=True)
class Decision:
    action: Action
    prior: Optional[Dict] = None  # matching prior mapping entry (SKIP / OVERRIDE)


@dataclass
class DumpOptions:
    src_font: Path
    glyphs_dir: Path
    config: Optional[Path] = None
    diff_config: Optional[Path] = None
    force: bool = False
    names: bool = False
    jobs: Optional[int] = None


@dataclass
class DumpResult:
    written: List[Path] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    overridden: List[int] = field(default_factory=list)
    diff: List[Dict] = field(default_factory=list)


@dataclass
class _PlannedWrite:
    code: int
    path: Path
    svg: str
    diff_entry: Optional[Dict]


# -----------------------------
# Pure helpers
# -----------------------------
def find_prior(prior_glyphs: List[Dict], code: int) -> Optional[Dict]:
    """First mapping entry whose `from` (or else `code`) equals `code`."""
    for entry in prior_glyphs:
        if not isinstance(entry, dict):
            continue
        if (entry.get("from") or entry.get("code")) == code:
            return entry
    return None


def classify(code: int, prior_glyphs: List[Dict], force: bool) -> Decision:
    prior = find_prior(prior_glyphs, code)
    if prior is None:
        return Decision(Action.NEW)
    if not force:
        return Decision(Action.SKIP, prior)
    return Decision(Action.OVERRIDE, prior)


def fix_path(d: str) -> str:
    # FontForge can't import "zm", it needs a space between the subpaths.
    return d.replace("zm", "z m")


def render_glyph_svg(d: str, width: Union[str, float], height: Union[str, int]) -> str:
    return (
        f"<svg height={quoteattr(str(height))} width={quoteattr(str(width))} xmlns={quoteattr(SVG_NS)}>\n"
        f"  <path d={quoteattr(d)} />\n"
        "</svg>\n"
    )


def glyph_filename(decision: Decision, glyph: GlyphRecord, code, names: bool) -> str:
    if decision.action is Action.OVERRIDE:
        base = decision.prior.get("file") or decision.prior.get("css")
        if not base:
            raise ConfigUnreadable(f"Config entry for {code:x} has neither 'file' nor 'css'")
        return f"{base}.svg"

    if names:
        if "/" in glyph.name or "\\" in glyph.name:
            raise MalformedSource(f"Glyph name {glyph.name!r} can't be used as a file name")
        return f"{glyph.name}.svg"
    if isinstance(code, int):
        return f"{FILENAME_PREFIX}{code:x}.svg"
    return f"{FILENAME_PREFIX}{code}.svg"


def new_diff_entry(glyph: GlyphRecord, code: int) -> Dict:
    return {
        "css": glyph.name,
        "code": code,
        "uid": glyph.uid or secrets.token_hex(16),
        "search": list(glyph.search or []),
    }


# -----------------------------
# I/O
# -----------------------------
def read_source(src_font: Union[str, Path]) -> str:
    try:
        return Path(src_font).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadable(f"Can't read font file {src_font}: {e}") from e


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirUncreatable(f"Can't create glyphs folder {path}: {e}") from e


def write_text_lf(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)


def _write_group(group: List[_PlannedWrite]) -> None:
    for item in group:
        try:
            write_text_lf(item.path, item.svg)
        except OSError as e:
            raise GlyphWriteError(f"Can't write glyph {item.code:x} to {item.path}: {e}") from e


def dump_glyphs(
    glyphs: List[GlyphRecord],
    prior_glyphs: List[Dict],
    glyphs_dir: Path,
    force: bool = False,
    names: bool = False,
    jobs: Optional[int] = None,
) -> DumpResult:
    glyphs_dir = Path(glyphs_dir)
    ensure_dir(glyphs_dir)

    result = DumpResult()
    plan: List[_PlannedWrite] = []

    for glyph in glyphs:
        code = char_code_at(glyph.unicode)
        decision = classify(code, prior_glyphs, force)

        if decision.action is Action.SKIP:
            print(f"{code:x} exists, skipping")
            result.skipped.append(code)
            continue

        svg = render_glyph_svg(fix_path(glyph.path_data), glyph.width, glyph.height)
        out_path = glyphs_dir / glyph_filename(decision, glyph, code, names)

        if decision.action is Action.OVERRIDE:
            print(f"{code:x} - Found, but override forced")
            result.overridden.append(code)
            plan.append(_PlannedWrite(code, out_path, svg, None))
        else:
            print(f"{code:x} - NEW glyph, writing...")
            plan.append(_PlannedWrite(code, out_path, svg, new_diff_entry(glyph, code)))

    if plan:
        # Glyphs sharing a file name go to one task so the last in source order wins.
        groups: Dict[Path, List[_PlannedWrite]] = {}
        for item in plan:
            groups.setdefault(item.path, []).append(item)

        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = [executor.submit(_write_group, group) for group in groups.values()]

        for future in futures:
            future.result()

    result.written = [item.path for item in plan]
    result.diff = [item.diff_entry for item in plan if item.diff_entry is not None]
    return result


def dump(options: DumpOptions) -> DumpResult:
    text = read_source(options.src_font)
    config = load_config(options.config)

    glyphs = load_glyphs(text, SourceFormat.from_path(options.src_font))
    result = dump_glyphs(
        glyphs,
        config["glyphs"],
        Path(options.glyphs_dir),
        force=options.force,
        names=options.names,
        jobs=options.jobs,
    )

    if options.diff_config is not None:
        write_diff_config(options.diff_config, result.diff)
        print(f"✓ Wrote {Path(options.diff_config).as_posix()} ({len(result.diff)} new glyph(s))")

    return result
