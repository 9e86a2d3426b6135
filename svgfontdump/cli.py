#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
svgfontdump/cli.py

  svg-font-dump -i font.svg -o glyphs/ [-c config.yml] [-d diff.yml] [-f] [-n]

Writes glyphs/glyph__<hex>.svg (or glyphs/<name>.svg with -n) for every glyph
of the source font not listed in the config.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .dump import DumpOptions, dump
from .errors import DumpError


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="svg-font-dump", description="Dump SVG font to separate glyphs")
    ap.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-c", "--config", help="Font config file (YAML mapping of known glyphs)")
    ap.add_argument("-i", "--src_font", required=True, help="Source font path (.svg font or fontello .json config)")
    ap.add_argument("-o", "--glyphs_dir", required=True, help="Glyphs output folder")
    ap.add_argument("-d", "--diff_config", help="Difference config output file")
    ap.add_argument("-f", "--force", action="store_true", help="Force override glyphs from config")
    ap.add_argument("-n", "--names", action="store_true", help="Try to guess new glyphs names")
    ap.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Parallel glyph writers (default: chosen by the thread pool)",
    )
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.jobs is not None and args.jobs < 1:
        raise SystemExit("--jobs must be at least 1")

    options = DumpOptions(
        src_font=Path(args.src_font),
        glyphs_dir=Path(args.glyphs_dir),
        config=Path(args.config) if args.config else None,
        diff_config=Path(args.diff_config) if args.diff_config else None,
        force=args.force,
        names=args.names,
        jobs=args.jobs,
    )

    try:
        result = dump(options)
    except DumpError as e:
        raise SystemExit(str(e)) from e

    print(f"✓ Wrote {len(result.written)} glyph(s) to {options.glyphs_dir.as_posix()}")


if __name__ == "__main__":
    main()
