"""
Move results.

Every transition returns a MoveResult instead of raising, so the caller
decides whether a rejected move is an error for the user or a no-op.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, TypeVar

from .errors import ErrorCode, error_for_code

if TYPE_CHECKING:
    from .state import GameState, Position

R = TypeVar("R")


@dataclass(frozen=True)
class MoveResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    """
    success: bool
    new_state: GameState | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    # The move that was applied, for display
    position: Position | None = None

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode) -> MoveResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: GameState, position: Position | None = None) -> MoveResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, position=position)

    def unwrap(self) -> GameState:
        """Return the new state, or raise the error this result carries."""
        if self.success and self.new_state is not None:
            return self.new_state
        raise error_for_code(
            self.error_code or ErrorCode.INVALID_PHASE,
            self.error or "Tried to unwrap a failed MoveResult",
        )

    def match(
        self,
        ok: Callable[[GameState], R],
        err: Callable[[ErrorCode, str], R],
    ) -> R:
        """Dispatch on the result: ok(new_state) or err(error_code, error)."""
        if self.success:
            return ok(self.new_state)
        return err(self.error_code, self.error or "")
