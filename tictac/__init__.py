"""
Tictac - Tic-Tac-Toe Engine

A deterministic, stateless engine for 3x3 Tic-Tac-Toe against an automated
opponent. The engine provides:
- Immutable game state and validated transitions
- Terminal outcome detection
- An exhaustive minimax move oracle for the automa
"""

__version__ = "0.1.0"
