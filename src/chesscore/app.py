"""Command-line entry point: perft counts for a FEN position."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

from chesscore.core.errors import NotationError
from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.perft import divide, perft

_LOGGER = logging.getLogger(__name__)
_LOG_LEVEL_ENV = "CHESSCORE_LOG_LEVEL"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesscore",
        description="Count legal move sequences (perft) from a position.",
    )
    parser.add_argument("--fen", default=STARTING_FEN, help="start position")
    parser.add_argument("--depth", type=int, default=3, help="plies to search")
    parser.add_argument(
        "--divide",
        action="store_true",
        help="print the node count below each root move",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(_LOG_LEVEL_ENV, "WARNING"),
        choices=_LOG_LEVELS,
        type=str.upper,
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the perft tool and return the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    # argparse does not check a default against choices
    if args.log_level not in _LOG_LEVELS:
        parser.error(f"invalid {_LOG_LEVEL_ENV} value: {args.log_level!r}")
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.depth < 1:
        parser.error("--depth must be at least 1")
    try:
        position = position_from_fen(args.fen)
    except NotationError as exc:
        _LOGGER.error("Cannot load position: %s", exc)
        return 2

    started = time.perf_counter()
    if args.divide:
        counts = divide(position, args.depth)
        for uci in sorted(counts):
            print(f"{uci}: {counts[uci]}")
        total = sum(counts.values())
    else:
        total = perft(position, args.depth)
    elapsed = time.perf_counter() - started

    print(f"Nodes: {total}")
    _LOGGER.info(
        "perft(%d) = %d in %.3fs (%.0f nps)",
        args.depth,
        total,
        elapsed,
        total / elapsed if elapsed else 0.0,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
