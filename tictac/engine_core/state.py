"""
Game State - Board, positions and the game state record.

Design principles:
- Immutable: every value here is frozen, transitions return new values
- Closed variants: Side, Cell and GameStatus are matched exhaustively,
  with assert_unreachable as the fallthrough
- Stateless: the caller owns the current GameState

How coordinates work:

    [
      [_, _, O],
      [_, _, _],
      [_, X, _],
    ]

Position(row, col). O is at (0, 2), X is at (2, 1).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NoReturn, Union

from .errors import OutOfRangeError

BOARD_SIZE = 3


def assert_unreachable(value: NoReturn) -> NoReturn:
    """
    Fallthrough for exhaustive branching over a closed variant.

    Reaching this means a value outside the variant was passed in.
    """
    raise TypeError(f"assert_unreachable received a value which should not exist: {value!r}")


class Side(Enum):
    """The two players' marks."""
    X = "X"
    O = "O"

    def opposite(self) -> Side:
        """Get the other side."""
        return toggle_player(self)


def toggle_player(side: Side) -> Side:
    """Simply toggle the player. X -> O. O -> X."""
    if side is Side.X:
        return Side.O
    elif side is Side.O:
        return Side.X
    return assert_unreachable(side)


@dataclass(frozen=True)
class Empty:
    """An unplayed cell."""

    def __str__(self) -> str:
        return "."


@dataclass(frozen=True)
class Occupied:
    """A cell holding a side's mark."""
    side: Side

    def __str__(self) -> str:
        return self.side.value


Cell = Union[Empty, Occupied]

EMPTY = Empty()


def validate_index(value: int) -> int:
    """
    Validate a single row or column index.

    Only 0, 1 and 2 are allowed; anything else raises OutOfRangeError.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRangeError(f"Invalid tile index {value!r}. Only 0 1 2 are allowed.")
    if not 0 <= value < BOARD_SIZE:
        raise OutOfRangeError(f"Invalid tile index {value}. Only 0 1 2 are allowed.")
    return value


@dataclass(frozen=True)
class Position:
    """A (row, col) address on the board."""
    row: int
    col: int

    def __post_init__(self):
        validate_index(self.row)
        validate_index(self.col)

    @classmethod
    def coerce(cls, value: Position | tuple[int, int]) -> Position:
        """Accept a Position or a (row, col) pair."""
        if isinstance(value, Position):
            return value
        try:
            row, col = value
        except (TypeError, ValueError):
            raise OutOfRangeError(f"Expected a (row, col) pair, got {value!r}") from None
        return cls(row, col)

    @classmethod
    def all(cls) -> Iterator[Position]:
        """Every position in row-major order."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield cls(row, col)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


Row = tuple[Cell, Cell, Cell]


def _empty_rows() -> tuple[Row, Row, Row]:
    return tuple(tuple(EMPTY for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


@dataclass(frozen=True)
class Board:
    """
    A 3x3 grid of cells.

    Boards are values: with_mark() returns a new board and leaves this
    one untouched, so callers can keep references to past boards.
    """
    rows: tuple[Row, Row, Row] = field(default_factory=_empty_rows)

    def __post_init__(self):
        rows = tuple(tuple(r) for r in self.rows)
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError("Board must be exactly 3x3")
        for row in rows:
            for cell in row:
                if not isinstance(cell, (Empty, Occupied)):
                    raise ValueError(f"Board cells must be Empty or Occupied, got {cell!r}")
        # Frozen: lists passed in are stored as tuples
        object.__setattr__(self, "rows", rows)

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_strings(cls, rows: list[str] | tuple[str, ...]) -> Board:
        """
        Build a board from text rows, e.g. ["X..", ".O.", "..."].

        "X" and "O" are marks; ".", "_" and " " are empty cells.
        """
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")
        parsed = []
        for text in rows:
            if len(text) != BOARD_SIZE:
                raise ValueError(f"Row {text!r} must have exactly {BOARD_SIZE} cells")
            row = []
            for char in text.upper():
                if char in (".", "_", " "):
                    row.append(EMPTY)
                elif char in ("X", "O"):
                    row.append(Occupied(Side(char)))
                else:
                    raise ValueError(f"Unknown cell {char!r} in row {text!r}")
            parsed.append(tuple(row))
        return cls(rows=tuple(parsed))

    def cell(self, position: Position) -> Cell:
        return self.rows[position.row][position.col]

    def is_empty_at(self, position: Position) -> bool:
        return isinstance(self.cell(position), Empty)

    def with_mark(self, position: Position, side: Side) -> Board:
        """Return new board with side's mark at position."""
        new_rows = [list(row) for row in self.rows]
        new_rows[position.row][position.col] = Occupied(side)
        return Board(rows=tuple(tuple(row) for row in new_rows))

    def empty_positions(self) -> list[Position]:
        """Empty cells in row-major order."""
        return [p for p in Position.all() if self.is_empty_at(p)]

    @property
    def move_count(self) -> int:
        return sum(1 for p in Position.all() if not self.is_empty_at(p))

    @property
    def is_full(self) -> bool:
        return self.move_count == BOARD_SIZE * BOARD_SIZE

    def to_strings(self) -> list[str]:
        return ["".join(str(c) for c in row) for row in self.rows]

    def pretty(self) -> str:
        """Render the board for a terminal."""
        lines = []
        for i, row in enumerate(self.rows):
            lines.append(" " + " | ".join(" " if isinstance(c, Empty) else str(c) for c in row))
            if i < BOARD_SIZE - 1:
                lines.append("---+---+---")
        return "\n".join(lines)


class GameStatus(Enum):
    """Game status - the game is in exactly one of these at all times."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DRAW = "draw"
    X_WINS = "x_wins"
    O_WINS = "o_wins"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.DRAW, GameStatus.X_WINS, GameStatus.O_WINS)

    @property
    def winner(self) -> Side | None:
        if self is GameStatus.X_WINS:
            return Side.X
        elif self is GameStatus.O_WINS:
            return Side.O
        elif self in (GameStatus.NOT_STARTED, GameStatus.IN_PROGRESS, GameStatus.DRAW):
            return None
        return assert_unreachable(self)

    @classmethod
    def win_for(cls, side: Side) -> GameStatus:
        if side is Side.X:
            return cls.X_WINS
        elif side is Side.O:
            return cls.O_WINS
        return assert_unreachable(side)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    The caller holds the single current GameState; every transition
    goes through the reducer and yields a new one.
    """
    board: Board
    status: GameStatus
    next_player: Side
    human_side: Side

    @property
    def computer_side(self) -> Side:
        return self.human_side.opposite()

    @property
    def is_computer_turn(self) -> bool:
        return self.status is GameStatus.IN_PROGRESS and self.next_player is not self.human_side

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            board=kwargs.get("board", self.board),
            status=kwargs.get("status", self.status),
            next_player=kwargs.get("next_player", self.next_player),
            human_side=kwargs.get("human_side", self.human_side),
        )


def start_selection() -> GameState:
    """Get the default game state (before the human picks a side)."""
    return GameState(
        board=Board.empty(),
        status=GameStatus.NOT_STARTED,
        next_player=Side.X,
        human_side=Side.X,
    )


def start_game(human_side: Side) -> GameState:
    """Get the initial game state once the human has picked a side."""
    if not isinstance(human_side, Side):
        raise ValueError(f"Unknown side: {human_side!r}")
    return GameState(
        board=Board.empty(),
        status=GameStatus.IN_PROGRESS,
        next_player=human_side,
        human_side=human_side,
    )
