import random
from enum import Enum

from maze_grid import CellState, Direction, Grid, Mark, Transition, UnknownAlgorithm

DEFAULT_ROWS = 21
DEFAULT_COLS = 21


class Variant(Enum):
    CARVE_BACKTRACK = 'mainroad'
    FRONTIER_EXPAND = 'natual'
    RECURSIVE_DIVISION = 'simple'

    @classmethod
    def from_name(cls, name):
        for variant in cls:
            if variant.value == name:
                return variant
        raise UnknownAlgorithm(
            f"Unknown algorithm {name!r}, expected one of: {', '.join(v.value for v in cls)}.")


DEFAULT_VARIANT = Variant.FRONTIER_EXPAND


def _set(grid, row, col, state, emit):
    grid.set_state(row, col, state)
    if emit is not None:
        emit(Transition(row, col, state, Mark.CARVED))


def carve_backtrack(grid, rng, emit=None):
    """
    Depth-first carver: one long winding main road with few branches.

    Every cell on the stack is re-examined after its child is exhausted,
    which is where the side branches come from.
    """
    row, col = grid.entry
    _set(grid, row, col, CellState.PASSAGE, emit)
    stack = [(row, col)]
    while stack:
        row, col = stack[-1]
        directions = [d for d in Direction if grid.is_wall(*d.step(row, col, 2))]
        if not directions:
            stack.pop()
            continue
        direction = rng.choice(directions)
        wall_row, wall_col = direction.step(row, col)
        _set(grid, wall_row, wall_col, CellState.PASSAGE, emit)
        next_row, next_col = direction.step(row, col, 2)
        _set(grid, next_row, next_col, CellState.PASSAGE, emit)
        stack.append((next_row, next_col))
    return grid


def frontier_expand(grid, rng, emit=None):
    """
    Randomized Prim style expansion: many short dead ends, no main road.
    """
    expansions = []

    def add_expansions(row, col):
        for direction in Direction:
            candidate = direction.step(row, col)
            if grid.is_wall(*candidate):
                expansions.append((candidate[0], candidate[1], direction))

    # seeded from (entry row, entry col); the original used the entry row for both
    row, col = grid.entry
    _set(grid, row, col, CellState.PASSAGE, emit)
    add_expansions(row, col)

    while expansions:
        index = rng.randrange(len(expansions))
        wall_row, wall_col, direction = expansions[index]
        far_row, far_col = direction.step(wall_row, wall_col)
        if grid.is_wall(far_row, far_col):
            _set(grid, wall_row, wall_col, CellState.PASSAGE, emit)
            _set(grid, far_row, far_col, CellState.PASSAGE, emit)
            add_expansions(far_row, far_col)
        expansions.pop(index)
    return grid


def recursive_division(grid, rng, emit=None):
    """
    Divide and conquer on a grid that starts as all passage.

    Each region gets a wall cross on even indices; three of its four arms
    get a single opening on an odd index, the fourth stays solid.
    """

    def divide(top, bottom, left, right):
        if top == bottom or left == right:
            return
        cross_row = top + rng.randrange((bottom - top) // 2) * 2 + 1
        cross_col = left + rng.randrange((right - left) // 2) * 2 + 1

        for col in range(left, right + 1):
            _set(grid, cross_row, col, CellState.WALL, emit)
        for row in range(top, bottom + 1):
            _set(grid, row, cross_col, CellState.WALL, emit)

        openings = [
            (top + rng.randrange(cross_row - top) // 2 * 2, cross_col),
            (bottom - rng.randrange(bottom - cross_row) // 2 * 2, cross_col),
            (cross_row, left + rng.randrange(cross_col - left) // 2 * 2),
            (cross_row, right - rng.randrange(right - cross_col) // 2 * 2),
        ]
        solid = rng.randrange(4)
        for index, (row, col) in enumerate(openings):
            if index != solid:
                _set(grid, row, col, CellState.PASSAGE, emit)

        divide(top, cross_row - 1, left, cross_col - 1)
        divide(cross_row + 1, bottom, left, cross_col - 1)
        divide(cross_row + 1, bottom, cross_col + 1, right)
        divide(top, cross_row - 1, cross_col + 1, right)

    divide(1, grid.rows - 2, 1, grid.cols - 2)
    return grid


GENERATORS = {
    Variant.CARVE_BACKTRACK: carve_backtrack,
    Variant.FRONTIER_EXPAND: frontier_expand,
    Variant.RECURSIVE_DIVISION: recursive_division,
}


def generate(grid, rng, variant, emit=None):
    return GENERATORS[variant](grid, rng, emit=emit)


def new_grid(variant, rows, cols, rng, entry=None, exit=None):
    # recursive division builds walls into open space, the others carve out of rock
    fill = CellState.PASSAGE if variant is Variant.RECURSIVE_DIVISION else CellState.WALL
    return Grid(rows, cols, fill=fill, entry=entry, exit=exit, rng=rng)


def create_maze(variant=DEFAULT_VARIANT, rows=DEFAULT_ROWS, cols=DEFAULT_COLS,
                rng=None, seed=None, entry=None, exit=None, emit=None):
    if isinstance(variant, str):
        variant = Variant.from_name(variant)
    if rng is None:
        rng = random.Random(seed)
    grid = new_grid(variant, rows, cols, rng, entry=entry, exit=exit)
    generate(grid, rng, variant, emit=emit)
    return grid
