"""
Generate a maze in the terminal and watch it being solved.

Usage:
  maze                      # natual maze, 21x21
  maze simple
  maze natual 11
  maze mainroad 17 27
  maze mainroad 31 --video maze.mp4
"""
import argparse
import sys

from maze_generators import DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_VARIANT, Variant, create_maze
from maze_grid import MazeError, check_dimensions, check_display
from maze_terminal import STEP_DELAY, TerminalRenderer, animate, terminal_size

USAGE = "Usage: maze <simple/mainroad/natual> <rows> <cols>"


def build_parser():
    parser = argparse.ArgumentParser(prog='maze', description="Maze generator + guided solver (terminal)")
    parser.add_argument('algorithm', nargs='?', default=None,
                        help=f"one of {', '.join(v.value for v in Variant)} (default {DEFAULT_VARIANT.value})")
    parser.add_argument('rows', nargs='?', type=int, default=None, help=f"odd number >= 5 (default {DEFAULT_ROWS})")
    parser.add_argument('cols', nargs='?', type=int, default=None, help="odd number >= 5 (default: same as rows)")
    parser.add_argument('--seed', type=int, default=None, help='random seed for a reproducible maze')
    parser.add_argument('--delay', type=float, default=STEP_DELAY, help='pause between solver steps (seconds)')
    parser.add_argument('--video', metavar='FILE', default=None,
                        help='render generation and solving to an .mp4/.gif instead of the terminal')
    return parser


def resolve_size(rows, cols):
    if rows is None:
        return DEFAULT_ROWS, DEFAULT_COLS
    return rows, rows if cols is None else cols


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        variant = DEFAULT_VARIANT if args.algorithm is None else Variant.from_name(args.algorithm)
        rows, cols = resolve_size(args.rows, args.cols)
        check_dimensions(rows, cols)
        if args.video is None:
            screen_rows, screen_cols = terminal_size()
            check_display(rows, cols, screen_rows, screen_cols)
    except MazeError as e:
        print(f"❌ {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    if args.video is not None:
        from maze_video import export_video
        return 0 if export_video(variant, rows, cols, args.video, seed=args.seed) else 1

    grid = create_maze(variant, rows, cols, seed=args.seed)
    try:
        animate(grid, TerminalRenderer(delay=args.delay))
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
