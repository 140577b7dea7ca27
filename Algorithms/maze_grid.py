import numbers
import random
from collections import namedtuple
from enum import Enum, IntEnum

import numpy as np

MIN_SIZE = 5


class MazeError(ValueError):
    pass


class InvalidDimensions(MazeError):
    pass


class DisplayTooSmall(MazeError):
    pass


class UnknownAlgorithm(MazeError):
    pass


class InvalidAnchor(MazeError):
    pass


class CellState(IntEnum):
    BORDER = 0
    WALL = 1
    PASSAGE = 2
    ENTRY = 3
    EXIT = 4
    CURRENT = 5
    VISITED = 6


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    def __init__(self, d_row, d_col):
        self.d_row = d_row
        self.d_col = d_col

    def step(self, row, col, n=1):
        return row + self.d_row * n, col + self.d_col * n


class Mark(Enum):
    CARVED = 'carved'
    CURRENT = 'current'
    EXPLORED = 'explored'
    BACKTRACKED = 'backtracked'
    ON_PATH = 'on_path'


Transition = namedtuple('Transition', ['row', 'col', 'state', 'mark'])


def manhattan_distance(pos1, pos2):
    return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def check_dimensions(rows, cols):
    if (not isinstance(rows, numbers.Integral) or not isinstance(cols, numbers.Integral)
            or rows < MIN_SIZE or cols < MIN_SIZE
            or rows % 2 == 0 or cols % 2 == 0):
        raise InvalidDimensions(
            f"The rows and columns must be odd numbers greater than 3 (got {rows}x{cols}).")


def check_display(rows, cols, screen_rows, screen_cols):
    # each cell is two characters wide; two lines are kept for the prompt
    if rows > screen_rows - 2 or cols * 2 > screen_cols:
        raise DisplayTooSmall(
            f"A {rows}x{cols} maze exceeds the terminal display range ({screen_rows}x{screen_cols}).")


class Grid:
    """
    Rectangular maze board.

    The outermost ring is always BORDER. The entry and exit anchors are
    interior cells one step inside the border, on odd offsets so they sit on
    the carving lattice; their markers are drawn on the border cell next to
    them.
    """

    def __init__(self, rows, cols, fill=CellState.WALL, entry=None, exit=None, rng=None):
        check_dimensions(rows, cols)
        self.rows = rows = int(rows)
        self.cols = cols = int(cols)
        self.board = np.full((rows, cols), int(fill), dtype=np.int8)
        self.board[0, :] = CellState.BORDER
        self.board[rows - 1, :] = CellState.BORDER
        self.board[:, 0] = CellState.BORDER
        self.board[:, cols - 1] = CellState.BORDER

        if entry is None and exit is None:
            entry, exit = self.place_anchors(rng or random.Random())
        elif entry is None or exit is None:
            raise InvalidAnchor("Entry and exit must be given together.")
        else:
            entry, exit = tuple(entry), tuple(exit)
            self.check_anchor(entry)
            self.check_anchor(exit)
            if entry == exit:
                raise InvalidAnchor(f"Entry and exit coincide at {entry}.")
        self.entry = entry
        self.exit = exit
        self.entry_marker = self.marker_for(entry)
        self.exit_marker = self.marker_for(exit)
        self.board[self.entry_marker] = CellState.ENTRY
        self.board[self.exit_marker] = CellState.EXIT

    def random_anchor(self, rng):
        side = rng.randrange(4)
        if side in (0, 1):
            col = rng.choice(range(1, self.cols - 1, 2))
            return (1 if side == 0 else self.rows - 2), col
        row = rng.choice(range(1, self.rows - 1, 2))
        return row, (1 if side == 2 else self.cols - 2)

    def place_anchors(self, rng):
        while True:
            entry = self.random_anchor(rng)
            exit = self.random_anchor(rng)
            if entry != exit:
                return entry, exit

    def check_anchor(self, anchor):
        row, col = anchor
        on_edge = row in (1, self.rows - 2) or col in (1, self.cols - 2)
        if not self.is_inside_interior(row, col) or not on_edge or row % 2 == 0 or col % 2 == 0:
            raise InvalidAnchor(f"Anchor {anchor} is not an odd cell on the inner edge.")

    def marker_for(self, anchor):
        row, col = anchor
        if col == 1:
            return row, 0
        if col == self.cols - 2:
            return row, self.cols - 1
        if row == 1:
            return 0, col
        return self.rows - 1, col

    def is_inside_interior(self, row, col):
        return 0 < row < self.rows - 1 and 0 < col < self.cols - 1

    def state(self, row, col):
        return CellState(int(self.board[row, col]))

    def is_passage(self, row, col):
        return self.is_inside_interior(row, col) and bool(self.board[row, col] == CellState.PASSAGE)

    def is_wall(self, row, col):
        return self.is_inside_interior(row, col) and bool(self.board[row, col] == CellState.WALL)

    def is_entry(self, row, col):
        return (row, col) == self.entry

    def is_exit(self, row, col):
        return (row, col) == self.exit

    def set_passage(self, row, col):
        self.board[row, col] = CellState.PASSAGE

    def set_wall(self, row, col):
        self.board[row, col] = CellState.WALL

    def set_state(self, row, col, state):
        self.board[row, col] = state

    def passage_count(self):
        return int(np.count_nonzero(self.board == CellState.PASSAGE))

    def clear_trail(self):
        trail = (self.board == CellState.CURRENT) | (self.board == CellState.VISITED)
        self.board[trail] = CellState.PASSAGE

    def copy(self):
        other = Grid.__new__(Grid)
        other.__dict__.update(self.__dict__)
        other.board = self.board.copy()
        return other

    def lines(self):
        for row in range(self.rows):
            yield [self.state(row, col) for col in range(self.cols)]
