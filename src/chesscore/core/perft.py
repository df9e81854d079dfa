"""Perft: count leaf nodes of the legal move tree.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

from chesscore.core.move_generator import MoveGenerator
from chesscore.core.position import Position


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* using make/unmake.

    The position is left exactly as it was passed in.
    """
    if depth < 0:
        raise ValueError(f"Perft depth must be non-negative, got {depth}")
    if depth == 0:
        return 1
    moves = MoveGenerator(position).generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        with position.probe(move):
            nodes += perft(position, depth - 1)
    return nodes


def divide(position: Position, depth: int) -> dict[str, int]:
    """Per-root-move leaf counts, keyed by UCI move."""
    if depth < 1:
        raise ValueError(f"Divide depth must be at least 1, got {depth}")
    counts: dict[str, int] = {}
    for move in MoveGenerator(position).generate_legal_moves():
        with position.probe(move):
            counts[move.uci] = perft(position, depth - 1)
    return counts
