"""
Tests for the minimax oracle and baseline policies.

Tests:
- Oracle only picks open cells
- Oracle wins when it can and blocks when it must
- Optimal play against itself always draws
- The automa never loses against a random human
- Caller protocol violations raise
"""

import pytest

from ..bots import FirstLegalPolicy, MinimaxPolicy, RandomPolicy, choose_move
from ..bots import minimax
from ..engine_core.action_generator import legal_moves
from ..engine_core.errors import ErrorCode, NoLegalMovesError
from ..engine_core.reducer import apply_move
from ..engine_core.state import Board, GameState, GameStatus, Position, Side, start_game, start_selection
from .conftest import make_state


def play_out(state: GameState, human_policy=None) -> GameState:
    """Play to the end; the oracle moves for the automa and, without a policy, the human."""
    moves = 0
    while state.status is GameStatus.IN_PROGRESS:
        if human_policy is not None and not state.is_computer_turn:
            position = human_policy.select_move(state, legal_moves(state)).position
        else:
            position = choose_move(state)
        state = apply_move(state, position).unwrap()
        moves += 1
        assert moves <= 9
    return state


class TestOracleLegality:
    """Tests that the oracle only selects legal cells."""

    @pytest.mark.parametrize("rows,next_player", [
        (["X..", "...", "..."], Side.O),
        (["XO.", ".X.", "O.."], Side.X),
        (["XOX", "OX.", "..O"], Side.X),
        (["XOX", "XOO", "OX."], Side.X),
    ])
    def test_picks_open_cell(self, rows, next_player):
        state = make_state(rows, next_player=next_player)

        position = choose_move(state)

        assert 0 <= position.row <= 2 and 0 <= position.col <= 2
        assert state.board.is_empty_at(position)

    def test_single_open_cell(self):
        state = make_state(["XOX", "XOO", "OX."], next_player=Side.X)
        assert choose_move(state) == Position(2, 2)

    def test_board_built_from_lists(self):
        """Boards built directly from list rows can be searched."""
        rows = [list(row) for row in Board.from_strings(["X..", "XO.", "..."]).rows]
        state = GameState(
            board=Board(rows=rows),
            status=GameStatus.IN_PROGRESS,
            next_player=Side.O,
            human_side=Side.X,
        )
        assert choose_move(state) == Position(2, 0)

    def test_does_not_mutate_state(self, diagonal_threat):
        rows_before = diagonal_threat.board.to_strings()
        choose_move(diagonal_threat)
        assert diagonal_threat.board.to_strings() == rows_before


class TestOracleTactics:
    """Tests for forced moves."""

    def test_blocks_single_threat(self):
        """X threatens column 0; the automa must take (2,0)."""
        state = make_state(["X..", "XO.", "..."], next_player=Side.O, human_side=Side.X)
        assert choose_move(state) == Position(2, 0)

    def test_takes_win_over_block(self):
        """Winning at (1,2) beats blocking at (0,2)."""
        state = make_state(["XX.", "OO.", "X.."], next_player=Side.O, human_side=Side.X)
        assert choose_move(state) == Position(1, 2)

    def test_win_that_also_blocks(self):
        state = make_state(["XX.", ".OO", "X.."], next_player=Side.O, human_side=Side.X)
        assert choose_move(state) == Position(1, 0)

    def test_human_side_takes_its_win(self):
        """On the human's turn the oracle plays the human's best move."""
        state = make_state(["OO.", "XX.", "O.."], next_player=Side.X, human_side=Side.X)
        assert choose_move(state) == Position(1, 2)

    def test_automa_playing_x(self):
        """Same threat with the sides swapped."""
        state = make_state(["O..", "OX.", "..."], next_player=Side.X, human_side=Side.O)
        assert choose_move(state) == Position(2, 0)

    def test_first_winning_move_in_scan_order(self):
        """
        Scores have no depth bonus: a forced win found first in scan order
        is preferred over the immediate win at (2,2).
        """
        state = make_state(["OXX", ".O.", ".X."], next_player=Side.O, human_side=Side.X)
        assert choose_move(state) == Position(1, 0)

    def test_ties_break_row_major(self, new_game):
        """Every opening draws, so the first cell is chosen."""
        assert choose_move(new_game) == Position(0, 0)


class TestOptimalPlay:
    """Exhaustive properties of the oracle."""

    @pytest.mark.parametrize("human_side", [Side.X, Side.O])
    def test_self_play_draws(self, human_side):
        state = play_out(start_game(human_side))
        assert state.status is GameStatus.DRAW
        assert state.board.is_full

    @pytest.mark.parametrize("human_side", [Side.X, Side.O])
    def test_never_loses_to_random_human(self, human_side):
        for seed in range(25):
            state = play_out(start_game(human_side), human_policy=RandomPolicy(seed=seed))
            assert state.status.is_terminal
            assert state.status.winner is not human_side

    def test_beats_first_legal_human(self):
        state = play_out(start_game(Side.X), human_policy=FirstLegalPolicy())
        assert state.status is GameStatus.O_WINS

    def test_no_state_kept_between_calls(self, new_game, diagonal_threat):
        first = choose_move(diagonal_threat)
        choose_move(new_game)

        assert choose_move(diagonal_threat) == first
        module_tables = [
            name for name, value in vars(minimax).items()
            if not name.startswith("__") and isinstance(value, (dict, list, set)) and value
        ]
        assert module_tables == []


class TestProtocolViolations:
    """choose_move on a finished or unstarted game raises."""

    def test_terminal_state(self, finished_game):
        with pytest.raises(NoLegalMovesError) as exc_info:
            choose_move(finished_game)
        assert exc_info.value.code == ErrorCode.NO_LEGAL_MOVES

    def test_full_board(self):
        state = make_state(["XOX", "XOO", "OXX"], next_player=Side.O)
        with pytest.raises(NoLegalMovesError):
            choose_move(state)

    def test_not_started(self):
        with pytest.raises(NoLegalMovesError):
            choose_move(start_selection())

    def test_status_disagrees_with_board(self):
        """A won board mislabelled as in progress is still rejected."""
        state = GameState(
            board=Board.from_strings(["XXX", "OO.", "..."]),
            status=GameStatus.IN_PROGRESS,
            next_player=Side.O,
            human_side=Side.X,
        )
        with pytest.raises(NoLegalMovesError):
            choose_move(state)


class TestPolicies:
    """Tests for the BotPolicy implementations."""

    def test_minimax_policy_matches_choose_move(self, diagonal_threat):
        state = apply_move(diagonal_threat, (0, 2)).unwrap()
        legal = legal_moves(state)

        decision = MinimaxPolicy().select_move(state, legal)

        assert decision.position == choose_move(state)
        assert decision.evaluated_moves == len(legal)
        assert set(decision.evaluation_details["scores"]) == {p.as_tuple() for p in legal}

    def test_random_policy_selects_legal(self, new_game):
        policy = RandomPolicy(seed=42)
        legal = legal_moves(new_game)
        for _ in range(10):
            decision = policy.select_move(new_game, legal)
            assert decision.position in legal

    def test_random_policy_is_seeded(self, new_game):
        legal = legal_moves(new_game)
        a = [RandomPolicy(seed=7).select_move(new_game, legal).position for _ in range(3)]
        b = [RandomPolicy(seed=7).select_move(new_game, legal).position for _ in range(3)]
        assert a == b

    def test_first_legal_policy(self, new_game):
        decision = FirstLegalPolicy().select_move(new_game, legal_moves(new_game))
        assert decision.position == Position(0, 0)

    @pytest.mark.parametrize("policy", [RandomPolicy(seed=1), FirstLegalPolicy(), MinimaxPolicy()])
    def test_no_legal_moves_raises(self, policy, finished_game):
        with pytest.raises(NoLegalMovesError):
            policy.select_move(finished_game, [])

    def test_policy_names(self):
        assert MinimaxPolicy().get_name() == "MinimaxPolicy"
