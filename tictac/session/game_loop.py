"""
Game Loop - The caller side of the engine protocol.

The loop:
1. Human picks a side
2. Human submits a move, the engine validates and applies it
3. If the game goes on, wait the "thinking" delay
4. Automa picks a move, the engine applies it
5. Repeat until the status is terminal, then reset

The engine itself is stateless; the loop owns the single current
GameState and lets at most one move be in flight at a time.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging
import threading
import time

from ..bots import BotPolicy, MinimaxPolicy
from ..config import Settings
from ..engine_core import (
    ErrorCode,
    GameState,
    GameStatus,
    Position,
    Side,
    apply_move,
    legal_moves,
    start_game,
    start_selection,
)

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    SELECTING_SIDE = "selecting_side"
    WAITING_HUMAN_MOVE = "waiting_human_move"
    RUNNING_AUTOMA = "running_automa"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing a request.

    On failure game_state is the unchanged current state.
    """
    success: bool
    loop_state: LoopState
    game_state: GameState

    human_move: Position | None = None
    automa_move: Position | None = None

    error: str | None = None
    error_code: ErrorCode | None = None

    # Game over info
    winner: Side | None = None
    is_draw: bool = False


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop()
        loop.select_side(Side.X)

        result = loop.submit_move((1, 1))
        if not result.success:
            show_error(result.error)

        render(result.game_state)
        if result.loop_state is LoopState.GAME_OVER:
            loop.reset()
    """

    def __init__(
        self,
        policy: BotPolicy | None = None,
        think_delay: float | None = None,
        settings: Settings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if think_delay is None:
            settings = settings or Settings.from_env()
            think_delay = settings.think_delay
        self.policy = policy or MinimaxPolicy()
        self.think_delay = think_delay
        self._sleep = sleep
        self._lock = threading.Lock()

        self.game_state = start_selection()
        self.state = LoopState.SELECTING_SIDE

    def select_side(self, side: Side) -> TurnResult:
        """Start a game with the human playing side."""
        if not self._lock.acquire(blocking=False):
            return self._busy()
        try:
            if self.state is not LoopState.SELECTING_SIDE:
                return self._failure(
                    "Side already chosen - reset to start a new game",
                    ErrorCode.INVALID_PHASE,
                )
            self.game_state = start_game(side)
            self.state = LoopState.WAITING_HUMAN_MOVE
            logger.debug("Human plays %s", side.value)
            return self._result()
        finally:
            self._lock.release()

    def submit_move(self, position: Position | tuple[int, int]) -> TurnResult:
        """
        Apply the human's move, then the automa's reply if the game goes on.

        Rejected moves leave the game state untouched. If the policy fails
        the error propagates and the human move is rolled back with it.
        """
        if not self._lock.acquire(blocking=False):
            return self._busy()
        try:
            result = apply_move(self.game_state, position)
            if not result.success:
                return self._failure(result.error, result.error_code)

            game_state = result.new_state
            human_move = result.position
            automa_move = None

            if game_state.is_computer_turn:
                self.state = LoopState.RUNNING_AUTOMA
                try:
                    game_state, automa_move = self._run_automa_turn(game_state)
                except Exception:
                    # Roll back the whole turn, human move included
                    self.state = self._state_after(self.game_state)
                    raise

            self.game_state = game_state
            self.state = self._state_after(game_state)
            if self.state is LoopState.GAME_OVER:
                logger.info("Game over: %s", self.game_state.status.value)
            return self._result(human_move=human_move, automa_move=automa_move)
        finally:
            self._lock.release()

    def reset(self) -> TurnResult:
        """Discard the current game and go back to side selection."""
        if not self._lock.acquire(blocking=False):
            return self._busy()
        try:
            self.game_state = start_selection()
            self.state = LoopState.SELECTING_SIDE
            return self._result()
        finally:
            self._lock.release()

    def _run_automa_turn(self, game_state: GameState) -> tuple[GameState, Position]:
        if self.think_delay > 0:
            self._sleep(self.think_delay)

        decision = self.policy.select_move(game_state, legal_moves(game_state))
        logger.debug("%s plays %s: %s", self.policy.get_name(), decision.position, decision.explanation)

        # A policy returning an illegal move is a bug, not a user error
        return apply_move(game_state, decision.position).unwrap(), decision.position

    @staticmethod
    def _state_after(game_state: GameState) -> LoopState:
        if game_state.status.is_terminal:
            return LoopState.GAME_OVER
        if game_state.status is GameStatus.NOT_STARTED:
            return LoopState.SELECTING_SIDE
        return LoopState.WAITING_HUMAN_MOVE

    def _result(self, **kwargs) -> TurnResult:
        status = self.game_state.status
        return TurnResult(
            success=True,
            loop_state=self.state,
            game_state=self.game_state,
            winner=status.winner,
            is_draw=status is GameStatus.DRAW,
            **kwargs,
        )

    def _failure(self, error: str, error_code: ErrorCode) -> TurnResult:
        return TurnResult(
            success=False,
            loop_state=self.state,
            game_state=self.game_state,
            error=error,
            error_code=error_code,
        )

    def _busy(self) -> TurnResult:
        return self._failure("A move is already being processed", ErrorCode.BUSY)
