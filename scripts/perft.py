#!/usr/bin/env python3
# ruff: noqa: E402
"""Count move-tree leaves from a position, optionally split per root move.

Usage: python scripts/perft.py --depth 4 [--fen FEN] [--divide]
"""
from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Optional

# Running from a checkout without installing the package
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from chesscore.engine.board import Board, STARTPOS_FEN
from chesscore.engine.errors import MalformedNotation
from chesscore.engine.perft import divide, perft


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--fen", default=STARTPOS_FEN, help="position to start from (default: startpos)")
    parser.add_argument("--depth", type=int, default=3, help="plies to expand (default: 3)")
    parser.add_argument("--divide", action="store_true", help="also list the count under each root move")
    args = parser.parse_args(argv)

    try:
        board = Board.from_fen(args.fen)
    except MalformedNotation as e:
        parser.error(str(e))

    started = time.perf_counter()
    if args.divide and args.depth > 0:
        per_move = divide(board, args.depth)
        for uci, count in sorted(per_move.items()):
            print(f"{uci}: {count}")
        nodes = sum(per_move.values())
    else:
        nodes = perft(board, args.depth)
    seconds = max(time.perf_counter() - started, 1e-9)
    print(f"depth {args.depth}: {nodes} nodes in {seconds * 1000:.0f} ms ({nodes / seconds:.0f} nps)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
