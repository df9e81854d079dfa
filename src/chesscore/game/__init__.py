"""Game layer: coordinate-driven facade over the rules core.

Quick start::

    from chesscore.game import Game
    from chesscore.core.types import E2, E4

    game = Game()
    game.play(E2, E4)
    game.revert()
"""

from chesscore.game.state import Game

__all__ = ["Game"]
