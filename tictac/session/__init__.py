"""
Session Module - Drives one play-through of a game.

The loop holds the current game state, applies the human's moves,
runs the automa's replies and resets when the game ends. Nothing is
persisted.
"""

from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
]
