"""
Reducer - Applies moves to game state.

The reducer is the single point of state transition.
All moves must go through apply_move().

Design principles:
- Pure function: (state, position) -> MoveResult
- Validates before applying
- Status is always recomputed from the board, never carried over
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import (
    Board,
    Empty,
    GameState,
    GameStatus,
    Occupied,
    Position,
    assert_unreachable,
    toggle_player,
)
from .action import MoveResult
from .errors import ErrorCode, OutOfRangeError

logger = logging.getLogger(__name__)

# Order matters only for which line is reported when several are complete
WIN_LINES: tuple[tuple[tuple[int, int], ...], ...] = (
    # rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((2, 0), (1, 1), (0, 2)),
)


def _line_winner(board: Board, line: tuple[tuple[int, int], ...]) -> GameStatus | None:
    """Return the win status if all three cells hold the same mark."""
    first, *rest = (board.rows[r][c] for r, c in line)
    if isinstance(first, Empty):
        return None
    elif isinstance(first, Occupied):
        if all(cell == first for cell in rest):
            return GameStatus.win_for(first.side)
        return None
    return assert_unreachable(first)


def compute_status(board: Board) -> GameStatus:
    """
    Given a board determine the current game status.

    Checks rows, then columns, then the two diagonals for a winner, then
    whether any cell is still open (in progress), and finally returns draw.
    """
    for line in WIN_LINES:
        status = _line_winner(board, line)
        if status is not None:
            return status

    if board.is_full:
        return GameStatus.DRAW
    return GameStatus.IN_PROGRESS


@dataclass
class Reducer:
    """
    Reducer applies moves to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, position: Position | tuple[int, int]) -> MoveResult:
        """
        Apply a move for state.next_player.

        Returns MoveResult with new state or error.
        """
        validation_error = self._validate_phase(state)
        if validation_error:
            logger.debug("Rejected move %r: %s", position, validation_error)
            return MoveResult.failure(validation_error, ErrorCode.INVALID_PHASE)

        try:
            position = Position.coerce(position)
        except OutOfRangeError as e:
            logger.debug("Rejected move %r: %s", position, e)
            return MoveResult.failure(str(e), ErrorCode.OUT_OF_RANGE)

        if not state.board.is_empty_at(position):
            error = f"Tile {position} is already occupied, please choose another."
            logger.debug("Rejected move %s: occupied", position)
            return MoveResult.failure(error, ErrorCode.CELL_OCCUPIED)

        new_board = state.board.with_mark(position, state.next_player)
        new_state = state._copy_with(
            board=new_board,
            status=compute_status(new_board),
            next_player=toggle_player(state.next_player),
        )
        return MoveResult.success_with_state(new_state, position=position)

    def _validate_phase(self, state: GameState) -> str | None:
        """
        Validate that moves are accepted in the current status.

        Returns error message if invalid, None if valid.
        """
        status = state.status
        if status is GameStatus.NOT_STARTED:
            return "Game not started - pick a side first"
        elif status is GameStatus.IN_PROGRESS:
            return None
        elif status in (GameStatus.DRAW, GameStatus.X_WINS, GameStatus.O_WINS):
            return "Game is over - no moves allowed"
        return assert_unreachable(status)


def apply_move(state: GameState, position: Position | tuple[int, int]) -> MoveResult:
    """
    Convenience function to apply a move.

    Creates a Reducer and applies the move.
    """
    return Reducer().apply(state, position)
