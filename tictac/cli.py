"""
Tictac CLI - Command-line interface for the engine.

Usage:
    tictac play [--side X|O] [--delay S]     Play against the automa
    tictac selfplay [--human X|O] [--json]   Automa versus automa
    tictac suggest --board "X.. .X. ..."     Print the automa's move
"""

import argparse
import logging
import sys

from .config import Settings


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tictac - Tic-Tac-Toe Engine",
        prog="tictac",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the automa")
    play_parser.add_argument("--side", choices=["X", "O"], help="Your side (default from TICTAC_DEFAULT_SIDE)")
    play_parser.add_argument("--delay", type=float, help="Automa thinking time in seconds")

    # Self-play command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play the automa against itself")
    selfplay_parser.add_argument("--human", choices=["X", "O"], default="X", help="Side treated as human")
    selfplay_parser.add_argument("--json", action="store_true", help="Print the final state as JSON")

    # Suggest command
    suggest_parser = subparsers.add_parser("suggest", help="Suggest a move for a position")
    suggest_parser.add_argument("--board", required=True, help='Three rows, e.g. "X.. .O. ..."')
    suggest_parser.add_argument("--human", choices=["X", "O"], default="X", help="Human side")
    suggest_parser.add_argument("--next", choices=["X", "O"], help="Side to move (default: inferred)")

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "selfplay":
        cmd_selfplay(args)
    elif args.command == "suggest":
        cmd_suggest(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, settings: Settings):
    """Interactive game in the terminal."""
    from .engine_core import Side
    from .session import GameLoop, LoopState

    side = Side(args.side) if args.side else settings.default_side
    delay = args.delay if args.delay is not None else settings.think_delay

    loop = GameLoop(think_delay=delay)
    result = loop.select_side(side)
    print(f"You play {side.value}. Enter moves as: row col (0-2)")
    print(result.game_state.board.pretty())

    while result.loop_state is not LoopState.GAME_OVER:
        try:
            line = input("> ")
        except EOFError:
            print()
            sys.exit(1)
        try:
            row, col = (int(part) for part in line.split())
        except ValueError:
            print("Please enter two numbers, e.g. 1 1")
            continue

        result = loop.submit_move((row, col))
        if not result.success:
            print(f"Error: {result.error}")
            continue
        if result.automa_move is not None:
            print(f"Automa plays {result.automa_move}")
        print(result.game_state.board.pretty())

    if result.winner is None:
        print("It's a draw!")
    elif result.winner is side:
        print("You win!")
    else:
        print("The automa wins!")


def cmd_selfplay(args):
    """Automa versus automa from an empty board."""
    from .api import GameStateResponse
    from .bots import choose_move
    from .engine_core import GameStatus, Side, apply_move, start_game

    state = start_game(Side(args.human))
    while state.status is GameStatus.IN_PROGRESS:
        position = choose_move(state)
        state = apply_move(state, position).unwrap()
        if not args.json:
            print(f"{state.next_player.opposite().value} plays {position}")

    if args.json:
        print(GameStateResponse.from_state(state).model_dump_json(indent=2))
    else:
        print(state.board.pretty())
        print(f"Result: {state.status.value}")


def cmd_suggest(args):
    """Print the automa's move for a given position."""
    from .bots import choose_move
    from .engine_core import Board, GameState, NoLegalMovesError, Side, compute_status

    try:
        board = Board.from_strings(args.board.split())
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.next:
        next_player = Side(args.next)
    else:
        # X moves first
        marks = "".join(board.to_strings())
        next_player = Side.X if marks.count("X") == marks.count("O") else Side.O

    state = GameState(
        board=board,
        status=compute_status(board),
        next_player=next_player,
        human_side=Side(args.human),
    )
    try:
        position = choose_move(state)
    except NoLegalMovesError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"{position.row} {position.col}")


if __name__ == "__main__":
    main()
