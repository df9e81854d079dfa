"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.position import Position

CASTLING_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def start_position() -> Position:
    """Fresh standard starting position."""
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def castling_position() -> Position:
    """Both sides with clear castling lanes on both wings."""
    return position_from_fen(CASTLING_FEN)
