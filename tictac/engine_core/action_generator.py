"""
Move Generator - Enumerates legal moves.

Used by:
1. Bots to enumerate candidate moves
2. UI to show open tiles
"""

from __future__ import annotations

from .state import Board, GameState, GameStatus, Position


def legal_moves(state: GameState | Board) -> list[Position]:
    """
    Legal moves in row-major order.

    A GameState that is not in progress has no legal moves; a bare Board
    yields its empty cells.
    """
    if isinstance(state, GameState):
        if state.status is not GameStatus.IN_PROGRESS:
            return []
        return state.board.empty_positions()
    return state.empty_positions()
