"""
Bots module - Automa AI implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- MinimaxPolicy / choose_move: The optimal move oracle
- RandomPolicy, FirstLegalPolicy: Baselines
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .minimax import MinimaxPolicy, choose_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "MinimaxPolicy",
    "choose_move",
]
