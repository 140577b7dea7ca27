import shutil
import sys
import time

from maze_grid import CellState, Mark
from maze_solver import Solver

STEP_DELAY = 0.05
FALLBACK_SIZE = (80, 24)

RESET = '\033[0m'
BLOCK = f'\033[7m  {RESET}'

STATE_GLYPHS = {
    CellState.BORDER: BLOCK,
    CellState.WALL: BLOCK,
    CellState.PASSAGE: '  ',
    CellState.ENTRY: f'\033[7;32mI {RESET}',
    CellState.EXIT: f'\033[7;32mO {RESET}',
    CellState.CURRENT: f'\033[31mo {RESET}',
    CellState.VISITED: f'\033[33m* {RESET}',
}

MARK_GLYPHS = {
    Mark.CURRENT: STATE_GLYPHS[CellState.CURRENT],
    Mark.EXPLORED: STATE_GLYPHS[CellState.VISITED],
    Mark.BACKTRACKED: f'\033[35m* {RESET}',
    Mark.ON_PATH: f'\033[31m+ {RESET}',
}


def terminal_size():
    """Return (rows, cols) of the hosting terminal."""
    size = shutil.get_terminal_size(FALLBACK_SIZE)
    return size.lines, size.columns


def glyph_for(transition):
    if transition.mark in MARK_GLYPHS:
        return MARK_GLYPHS[transition.mark]
    return STATE_GLYPHS[transition.state]


class TerminalRenderer:
    def __init__(self, stream=None, delay=STEP_DELAY):
        self.stream = stream if stream is not None else sys.stdout
        self.delay = delay

    def write(self, text):
        self.stream.write(text)
        self.stream.flush()

    def hide_cursor(self, hide=True):
        self.write('\033[?25l' if hide else '\033[?25h')

    def cursor_to(self, row, col, text=''):
        self.write(f'\033[{row + 1};{col * 2 + 1}H{text}')

    def clear(self):
        self.write('\033[2J\033[1;1H')

    def render(self, grid):
        self.clear()
        lines = [''.join(STATE_GLYPHS[state] for state in line) for line in grid.lines()]
        self.write('\n'.join(lines) + '\n')

    def draw(self, transition):
        self.cursor_to(transition.row, transition.col, glyph_for(transition))

    def pause(self):
        if self.delay > 0:
            time.sleep(self.delay)

    def finish(self, grid):
        self.cursor_to(grid.rows, 0)
        self.hide_cursor(False)


def animate(grid, renderer=None):
    renderer = renderer or TerminalRenderer()
    solver = Solver(grid)
    renderer.hide_cursor(True)
    try:
        renderer.render(grid)
        for transition in solver.steps():
            renderer.draw(transition)
            renderer.pause()
    finally:
        renderer.finish(grid)
    return solver
