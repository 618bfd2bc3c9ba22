from __future__ import annotations
import argparse
import os
import sys
from typing import Any, Dict, List, Optional

import yaml
from tqdm import tqdm

from sokoban_core.parser import parse_sokoban
from sokoban_core.levels.resolve import load_level_text
from sokoban_core.moves import replay
from sokoban_core.render import render_ascii
from search.bfs import bfs

# installed as package data next to this module
DEFAULT_CONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), "configs", "solve.yaml")
DEFAULTS: Dict[str, Any] = {"progress": True, "render": False}


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Solver section of the YAML config merged over the defaults."""
    cfg = dict(DEFAULTS)
    if path is None or not os.path.exists(path):
        return cfg
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    cfg.update(raw.get("solver") or {})
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Find a shortest (fewest moves) Sokoban solution.")
    p.add_argument(
        "level_id",
        nargs="?",
        default="-",
        help="Level id like 'path/to/pack.txt#idx', or '-' to read stdin.",
    )
    p.add_argument("--config", type=str, default=DEFAULT_CONFIG)
    p.add_argument("--progress", dest="progress", action="store_true", default=None,
                   help="show search progress on stderr")
    p.add_argument("--no-progress", dest="progress", action="store_false")
    p.add_argument("--render", dest="render", action="store_true", default=None,
                   help="print the board after every move")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    if args.progress is not None:
        cfg["progress"] = args.progress
    if args.render is not None:
        cfg["render"] = args.render

    if args.level_id == "-":
        text = sys.stdin.read()
    else:
        try:
            text = load_level_text(args.level_id)
        except (OSError, ValueError, IndexError) as e:
            print(f"Could not read level: {e}", file=sys.stderr)
            return 1

    parsed = parse_sokoban(text)
    if parsed is None:
        print("Could not parse input", file=sys.stderr)
        return 1
    smap, start = parsed

    if cfg["progress"]:
        bar = tqdm(desc="Searching", unit="state", file=sys.stderr)
        on_distance = lambda d: tqdm.write(f"wait: {d}", file=sys.stderr)
        on_step = lambda _s: bar.update(1)
    else:
        bar = None
        on_distance = on_step = None
    try:
        res = bfs(smap, start, on_distance=on_distance, on_step=on_step)
    finally:
        if bar is not None:
            bar.close()

    if not res["success"]:
        print("Could not solve", file=sys.stderr)
        return 1

    path: str = res["path"]  # type: ignore[assignment]
    print(path)
    if cfg["render"]:
        st = start
        print(f"\n-- step 0 --\n{render_ascii(smap, st)}")
        for i, code in enumerate(path, 1):
            st = replay(smap, st, code)
            print(f"\n-- step {i} ({code}) --\n{render_ascii(smap, st)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
