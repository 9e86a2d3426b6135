# -*- coding: utf-8 -*-
"""
svgfontdump/mapping.py

Glyph mapping files (YAML). The prior mapping passed with --config and the
diff written with --diff_config share one layout:

    glyphs:
    - css: smile
      code: 0x1F600
      uid: 2b4c0c0b2f2e4d7a9a0c3b1d5e6f7a8b
      search: [face, happy]

Prior entries may use `from` instead of `code` and `file` instead of `css`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from .errors import ConfigUnreadable, DumpError, EmptyDiff


PathLike = Union[str, Path]


def load_config(config_path: Optional[PathLike]) -> Dict:
    if config_path is None:
        return {"glyphs": []}

    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigUnreadable(f"Can't read config file {config_path}: {e}") from e

    try:
        config = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigUnreadable(f"Can't parse config file {config_path}: {e}") from e

    if not isinstance(config, dict) or "glyphs" not in config:
        raise ConfigUnreadable(f"Config file {config_path} has no 'glyphs' key")
    if config["glyphs"] is None:
        config["glyphs"] = []
    if not isinstance(config["glyphs"], list):
        raise ConfigUnreadable(f"'glyphs' in {config_path} is not a list")

    return config


# -----------------------------
# Diff output
# -----------------------------
class HexInt(int):
    pass


class FlowList(list):
    pass


class DiffDumper(yaml.SafeDumper):
    pass


def _represent_hex_int(dumper: yaml.SafeDumper, data: HexInt) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:int", f"0x{int(data):X}")


def _represent_flow_list(dumper: yaml.SafeDumper, data: FlowList) -> yaml.SequenceNode:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


DiffDumper.add_representer(HexInt, _represent_hex_int)
DiffDumper.add_representer(FlowList, _represent_flow_list)


def dump_diff(diff: List[Dict]) -> str:
    glyphs = []
    for entry in diff:
        out = dict(entry)
        if isinstance(out.get("code"), int):
            out["code"] = HexInt(out["code"])
        out["search"] = FlowList(out.get("search") or [])
        glyphs.append(out)

    return yaml.dump(
        {"glyphs": glyphs},
        Dumper=DiffDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def write_diff_config(diff_path: PathLike, diff: List[Dict]) -> Path:
    if not diff:
        raise EmptyDiff("No new glyphs, skip writing diff")

    out = Path(diff_path)
    try:
        with open(out, "w", encoding="utf-8", newline="\n") as f:
            f.write(dump_diff(diff))
    except OSError as e:
        raise DumpError(f"Can't write diff config {out}: {e}") from e
    return out
