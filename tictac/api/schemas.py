"""
Pydantic Schemas - Snapshot models for a UI.

These models define the contract between a front end and the engine:
plain JSON-friendly values, no engine types. The engine itself never
needs them; they exist so a caller can render and exchange state.

Error Codes:
- OUT_OF_RANGE: a coordinate is not 0, 1 or 2
- CELL_OCCUPIED: the target tile already holds a mark
- INVALID_PHASE: a move was sent before side selection or after game over
- NO_LEGAL_MOVES: the automa was asked to move on a finished board
- BUSY: a move is already being processed
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..engine_core import (
    Board,
    ErrorCode,
    GameState,
    GameStatus,
    MoveResult,
    Position,
    compute_status,
)
from ..engine_core.state import Empty, Occupied, Side, assert_unreachable


# =============================================================================
# Enums
# =============================================================================

class SideSchema(str, Enum):
    """Player marks."""
    X = "X"
    O = "O"


class StatusSchema(str, Enum):
    """Game status values."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DRAW = "draw"
    X_WINS = "x_wins"
    O_WINS = "o_wins"


def _cell_schema(cell) -> Optional[SideSchema]:
    if isinstance(cell, Empty):
        return None
    elif isinstance(cell, Occupied):
        return SideSchema(cell.side.value)
    return assert_unreachable(cell)


# =============================================================================
# Shared Models
# =============================================================================

class PositionInfo(BaseModel):
    """A board coordinate. Range checks are left to the engine."""
    row: int
    col: int

    @classmethod
    def from_position(cls, position: Position) -> PositionInfo:
        return cls(row=position.row, col=position.col)


class GameStateResponse(BaseModel):
    """Full game state for display."""
    board: list[list[Optional[SideSchema]]] = Field(
        description="3 rows of 3 cells, null for an empty cell"
    )
    status: StatusSchema
    next_player: SideSchema
    human_side: SideSchema
    computer_side: SideSchema
    winner: Optional[SideSchema] = None
    is_terminal: bool = False
    open_cells: list[PositionInfo] = Field(default_factory=list)

    @field_validator("board")
    @classmethod
    def check_board_shape(cls, v):
        if len(v) != 3 or any(len(row) != 3 for row in v):
            raise ValueError("board must be 3x3")
        return v

    @classmethod
    def from_state(cls, state: GameState) -> GameStateResponse:
        """Snapshot an engine GameState."""
        board = [
            [_cell_schema(cell) for cell in row]
            for row in state.board.rows
        ]
        winner = state.status.winner
        return cls(
            board=board,
            status=StatusSchema(state.status.value),
            next_player=SideSchema(state.next_player.value),
            human_side=SideSchema(state.human_side.value),
            computer_side=SideSchema(state.computer_side.value),
            winner=SideSchema(winner.value) if winner else None,
            is_terminal=state.status.is_terminal,
            open_cells=[
                PositionInfo.from_position(p)
                for p in state.board.empty_positions()
            ] if state.status is GameStatus.IN_PROGRESS else [],
        )

    def to_state(self) -> GameState:
        """
        Rebuild an engine GameState from a snapshot.

        Raises ValueError if the status disagrees with the marks on the
        board. Only the side-selection phase has a status the board
        cannot show.
        """
        board = Board.from_strings([
            "".join("." if cell is None else cell.value for cell in row)
            for row in self.board
        ])
        status = GameStatus(self.status.value)
        if status is GameStatus.NOT_STARTED:
            if board.move_count:
                raise ValueError("A game that has not started must have an empty board")
        elif compute_status(board) is not status:
            raise ValueError(
                f"Status {status.value} does not match the board "
                f"({compute_status(board).value})"
            )
        return GameState(
            board=board,
            status=status,
            next_player=Side(self.next_player.value),
            human_side=Side(self.human_side.value),
        )


# =============================================================================
# Request / Response Models
# =============================================================================

class SelectSideRequest(BaseModel):
    side: SideSchema


class MoveRequest(BaseModel):
    """A move from the UI."""
    row: int
    col: int

    def to_position(self) -> tuple[int, int]:
        """Raw pair; the engine reports OUT_OF_RANGE itself."""
        return (self.row, self.col)


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    error_code: ErrorCode


class MoveResponse(BaseModel):
    """Result of submitting a move."""
    success: bool
    state: Optional[GameStateResponse] = None
    position: Optional[PositionInfo] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    @model_validator(mode="after")
    def check_failure_has_code(self):
        if not self.success and self.error_code is None:
            raise ValueError("failed responses need an error_code")
        return self

    @classmethod
    def from_result(cls, result: MoveResult) -> MoveResponse:
        if not result.success:
            return cls(success=False, error=result.error, error_code=result.error_code)
        return cls(
            success=True,
            state=GameStateResponse.from_state(result.new_state),
            position=PositionInfo.from_position(result.position) if result.position else None,
        )
