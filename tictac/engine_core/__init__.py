"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Creates the GameState (side selection, then play)
2. Validates and applies moves via the reducer
3. Recomputes the status after each move
4. Generates legal moves
"""

from .state import (
    Side,
    Empty,
    Occupied,
    Cell,
    EMPTY,
    Position,
    Board,
    GameStatus,
    GameState,
    start_selection,
    start_game,
    toggle_player,
    assert_unreachable,
)
from .errors import (
    ErrorCode,
    EngineError,
    OutOfRangeError,
    CellOccupiedError,
    InvalidPhaseError,
    NoLegalMovesError,
    LoopBusyError,
)
from .action import MoveResult
from .reducer import Reducer, apply_move, compute_status
from .action_generator import legal_moves

__all__ = [
    "Side",
    "Empty",
    "Occupied",
    "Cell",
    "EMPTY",
    "Position",
    "Board",
    "GameStatus",
    "GameState",
    "start_selection",
    "start_game",
    "toggle_player",
    "assert_unreachable",
    "ErrorCode",
    "EngineError",
    "OutOfRangeError",
    "CellOccupiedError",
    "InvalidPhaseError",
    "NoLegalMovesError",
    "LoopBusyError",
    "MoveResult",
    "Reducer",
    "apply_move",
    "compute_status",
    "legal_moves",
]
