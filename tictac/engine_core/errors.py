"""
Engine errors - Error codes and exceptions.

Transitions report failures through MoveResult.error_code; the exceptions
below are raised where a failure cannot be expressed as a result
(constructing a Position, asking the oracle for a move) or when a failed
result is unwrapped.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes."""
    OUT_OF_RANGE = "OUT_OF_RANGE"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    INVALID_PHASE = "INVALID_PHASE"
    NO_LEGAL_MOVES = "NO_LEGAL_MOVES"

    # Game loop only
    BUSY = "BUSY"


class EngineError(Exception):
    """Base class for engine errors. Carries an ErrorCode."""
    code: ErrorCode | None = None

    def __init__(self, message: str, code: ErrorCode | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class OutOfRangeError(EngineError, ValueError):
    """A coordinate is not 0, 1 or 2."""
    code = ErrorCode.OUT_OF_RANGE


class CellOccupiedError(EngineError):
    code = ErrorCode.CELL_OCCUPIED


class InvalidPhaseError(EngineError):
    """A move was submitted before side selection or after the game ended."""
    code = ErrorCode.INVALID_PHASE


class NoLegalMovesError(EngineError):
    """The oracle was asked for a move on a full or finished board."""
    code = ErrorCode.NO_LEGAL_MOVES


class LoopBusyError(EngineError):
    code = ErrorCode.BUSY


_ERRORS_BY_CODE: dict[ErrorCode, type[EngineError]] = {
    ErrorCode.OUT_OF_RANGE: OutOfRangeError,
    ErrorCode.CELL_OCCUPIED: CellOccupiedError,
    ErrorCode.INVALID_PHASE: InvalidPhaseError,
    ErrorCode.NO_LEGAL_MOVES: NoLegalMovesError,
    ErrorCode.BUSY: LoopBusyError,
}


def error_for_code(code: ErrorCode, message: str) -> EngineError:
    """Build the exception matching an error code."""
    error_cls = _ERRORS_BY_CODE.get(code, EngineError)
    return error_cls(message, code)
