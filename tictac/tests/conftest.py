"""
Pytest fixtures for Tictac tests.
"""

import pytest

from ..engine_core.state import Board, GameState, GameStatus, Side, start_game
from ..engine_core.reducer import compute_status


def make_state(rows, next_player: Side, human_side: Side = Side.X) -> GameState:
    """Build a state from text rows, with the status computed from the board."""
    board = Board.from_strings(rows)
    return GameState(
        board=board,
        status=compute_status(board),
        next_player=next_player,
        human_side=human_side,
    )


@pytest.fixture
def new_game() -> GameState:
    """A fresh game with the human playing X."""
    return start_game(Side.X)


@pytest.fixture
def diagonal_threat() -> GameState:
    """X holds (0,0) and (1,1), O has answered twice, X to move."""
    return make_state(["XO.", ".X.", "O.."], next_player=Side.X)


@pytest.fixture
def finished_game() -> GameState:
    """X has completed the top row."""
    state = make_state(["XXX", "OO.", "..."], next_player=Side.O)
    assert state.status is GameStatus.X_WINS
    return state
