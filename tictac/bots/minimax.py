"""
Minimax oracle - Exhaustive game-tree search for the automa's move.

Scores are fixed relative to the human side, whoever is searching:
- human win:   -10
- automa win:  +10
- draw:          0

The automa maximizes, the human is modelled as minimizing (playing
optimally against the automa). Ties go to the first move in row-major
order. There is no depth bonus, so among equally scored wins the first
one in scan order is taken rather than the fastest.

Within one call, results per (board, side to move, human side) are memoised;
the table is dropped when the call returns and the search is still exhaustive.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..engine_core.errors import NoLegalMovesError
from ..engine_core.reducer import compute_status
from ..engine_core.state import (
    Board,
    GameState,
    GameStatus,
    Position,
    Side,
    assert_unreachable,
    toggle_player,
)
from .policy import BotDecision, BotPolicy

logger = logging.getLogger(__name__)

AUTOMA_WIN_SCORE = 10
HUMAN_WIN_SCORE = -10
DRAW_SCORE = 0


@dataclass(frozen=True)
class ScoredMove:
    """A candidate position and its minimax score."""
    score: int
    position: Position | None = None  # None at leaves


# Memo: (board, player to move, human side) -> best ScoredMove
Memo = dict[tuple[Board, Side, Side], ScoredMove]


def _leaf_score(status: GameStatus, human_side: Side) -> int | None:
    """Score a terminal status, or None if the game goes on."""
    if status is GameStatus.IN_PROGRESS:
        return None
    elif status is GameStatus.DRAW:
        return DRAW_SCORE
    elif status in (GameStatus.X_WINS, GameStatus.O_WINS):
        return HUMAN_WIN_SCORE if status.winner is human_side else AUTOMA_WIN_SCORE
    # compute_status never reports NOT_STARTED
    return assert_unreachable(status)


def _select(moves: list[ScoredMove], maximizing: bool) -> ScoredMove:
    """Pick the best move; strict comparison keeps the first of equals."""
    best = moves[0]
    for move in moves[1:]:
        if maximizing and move.score > best.score:
            best = move
        elif not maximizing and move.score < best.score:
            best = move
    return best


def _expand(board: Board, player: Side, human_side: Side, memo: Memo) -> list[ScoredMove]:
    """Score every empty cell for player, each on its own copy of the board."""
    moves = []
    for position in board.empty_positions():
        child = _minimax(board.with_mark(position, player), toggle_player(player), human_side, memo)
        moves.append(ScoredMove(score=child.score, position=position))
    return moves


def _minimax(board: Board, player: Side, human_side: Side, memo: Memo) -> ScoredMove:
    key = (board, player, human_side)
    cached = memo.get(key)
    if cached is not None:
        return cached

    score = _leaf_score(compute_status(board), human_side)
    if score is not None:
        result = ScoredMove(score=score)
    else:
        moves = _expand(board, player, human_side, memo)
        result = _select(moves, maximizing=player is not human_side)

    memo[key] = result
    return result


def _check_playable(state: GameState) -> None:
    if state.status is not GameStatus.IN_PROGRESS:
        raise NoLegalMovesError(f"No legal moves: game status is {state.status.value}")
    if compute_status(state.board) is not GameStatus.IN_PROGRESS:
        raise NoLegalMovesError("No legal moves: board is already decided")


def choose_move(state: GameState) -> Position:
    """
    Find the optimal move for state.next_player.

    Raises:
        NoLegalMovesError: if the game is not in progress or the board is
            full. This is a caller protocol violation.
    """
    _check_playable(state)
    memo: Memo = {}
    best = _minimax(state.board, state.next_player, state.human_side, memo)
    logger.debug(
        "Minimax picked %s for %s (score %d, %d nodes)",
        best.position, state.next_player.value, best.score, len(memo),
    )
    return best.position


class MinimaxPolicy(BotPolicy):
    """
    Optimal policy - exhaustive minimax.

    Never loses. Against optimal play every game is a draw.
    """

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Position],
    ) -> BotDecision:
        if not legal_moves:
            raise NoLegalMovesError("No legal moves available")
        _check_playable(state)

        moves = _expand(state.board, state.next_player, state.human_side, {})
        best = _select(moves, maximizing=state.next_player is not state.human_side)
        return BotDecision(
            position=best.position,
            explanation=f"Minimax score {best.score}",
            evaluated_moves=len(moves),
            best_score=float(best.score),
            evaluation_details={
                "scores": {m.position.as_tuple(): m.score for m in moves},
            },
        )
