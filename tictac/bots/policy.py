"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and returns a decision: which position
to play, plus details for the UI and for debugging.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.errors import NoLegalMovesError

if TYPE_CHECKING:
    from ..engine_core.state import GameState, Position


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The position to play
    - Explanation (for UI/debugging)
    - Evaluation details
    """
    position: Position
    explanation: str = ""

    # Evaluation details (for debugging)
    evaluated_moves: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects moves.
    Implementations range from baselines to exhaustive search.
    """

    @abstractmethod
    def select_move(
        self,
        state: GameState,
        legal_moves: list[Position],
    ) -> BotDecision:
        """
        Select a move from the legal moves.

        Args:
            state: Current game state
            legal_moves: Empty cells in row-major order

        Returns:
            BotDecision with the selected position

        Raises:
            NoLegalMovesError: if legal_moves is empty
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects moves uniformly at random.

    Used for:
    - Simulating a careless human in tests
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Position],
    ) -> BotDecision:
        if not legal_moves:
            raise NoLegalMovesError("No legal moves available")

        position = self.rng.choice(legal_moves)
        return BotDecision(
            position=position,
            explanation="Selected randomly",
            evaluated_moves=len(legal_moves),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first open tile.

    Used for deterministic testing.
    """

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Position],
    ) -> BotDecision:
        if not legal_moves:
            raise NoLegalMovesError("No legal moves available")

        return BotDecision(
            position=legal_moves[0],
            explanation="Selected first legal move",
            evaluated_moves=1,
        )
