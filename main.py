"""Main entry point for Black Box."""

import argparse
import logging
import sys

from controller import GameLogger, PuzzleSession
from game.blackbox_params import BlackBoxParams
from game.errors import BlackBoxError
from game.loaders import MoveLogLoader


def _build_params(args, parser):
    try:
        if args.params:
            params = BlackBoxParams.decode(args.params)
        else:
            params = BlackBoxParams.from_ball_range(args.width, args.height, args.balls)
        params.validate()
    except BlackBoxError as e:
        parser.error(f"Invalid puzzle parameters: {e}")
    return params


def _read_moves(stream):
    for line in stream:
        for move in line.split():
            yield move


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Black Box deduction puzzle",
        epilog="""
Moves:
  T<x>,<y>    toggle a ball guess at arena cell (x, y), 1-based
  LB<x>,<y>   toggle the lock on arena cell (x, y)
  LC<x>       lock/unlock column x
  LR<y>       lock/unlock row y
  F<n>        fire the probe at perimeter index n (0 = above column 1, clockwise)
  R           submit your guesses
  S           give up and reveal the solution

  Examples:
    --params w5h5m3M3 --seed 42 --moves "F0 F7 T2,2 T3,4 T4,4 R"
    --replay blackbox_42.txt
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--params", type=str, metavar="SPEC", help="Puzzle parameters, e.g. w8h8m3M6 (overrides --width/--height/--balls)"
    )
    parser.add_argument("--width", type=int, default=8, help="Arena width (default: 8)")
    parser.add_argument("--height", type=int, default=8, help="Arena height (default: 8)")
    parser.add_argument(
        "--balls", type=str, default="5", help="Number of balls, 'n' or 'min-max' (default: 5)"
    )
    parser.add_argument("--desc", type=str, help="Puzzle descriptor to play instead of a random puzzle")
    parser.add_argument(
        "--seed", type=int, help="Random seed for puzzle generation (recorded in the log when used with --desc)"
    )
    parser.add_argument("--moves", type=str, help="Space-separated moves to play (default: read from stdin)")
    parser.add_argument("--replay", type=str, help="Path to a move log to replay")
    parser.add_argument(
        "--move-log",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log moves to blackbox_<seed>.txt in DIR (default: current directory)",
    )
    parser.add_argument(
        "--transcript-log",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Write a transcript to blackbox_<seed>_transcript.txt in DIR (default: current directory)",
    )
    parser.add_argument(
        "--transcript-screen", action="store_true", help="Output a transcript of moves to screen"
    )
    parser.add_argument("--verbose", action="store_true", help="Show engine debug output")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    moves = None
    desc = args.desc
    seed = args.seed
    if args.replay:
        loader = MoveLogLoader(args.replay)
        moves = loader.load()
        params, desc, seed = loader.params, loader.desc, loader.seed
        if desc is None:
            parser.error(f"{args.replay} has no '# Desc:' header")
    else:
        params = _build_params(args, parser)

    try:
        session = PuzzleSession(params, desc=desc, seed=seed)
    except BlackBoxError as e:
        parser.error(f"Cannot start puzzle: {e}")
        return
    logger = GameLogger(
        session,
        move_log_dir=args.move_log,
        transcript_dir=args.transcript_log,
        log_to_screen=args.transcript_screen,
    )
    session.set_move_listener(logger.log_move)
    logger.start_log()

    if moves is None:
        moves = args.moves.split() if args.moves else _read_moves(sys.stdin)

    for move in moves:
        session.apply_move(move)
        if session.is_finished():
            break

    logger.log_comment(session.game.status_text())
    logger.end_log(session.game)
    session.game.print_state()


if __name__ == "__main__":
    main()
