from maze_grid import CellState, Direction, Mark, Transition, manhattan_distance


class Solver:
    """
    Guided depth-first search from the entry anchor to the exit anchor.

    Neighbours are tried closest-to-exit first (Manhattan distance, ties in
    Direction order). The search finds a path, not the shortest one.
    steps() yields every cell-state change; a renderer may pause between two
    of them.
    """

    def __init__(self, grid):
        self.grid = grid
        self.path = None
        self.found = False
        self.explored = 0

    def ordered_directions(self, row, col):
        exit_pos = self.grid.exit
        return sorted(Direction, key=lambda d: manhattan_distance(d.step(row, col), exit_pos))

    def _visit(self, row, col, mark):
        self.grid.set_state(row, col, CellState.CURRENT)
        yield Transition(row, col, CellState.CURRENT, Mark.CURRENT)
        if not self.grid.is_exit(row, col):
            self.grid.set_state(row, col, CellState.VISITED)
            yield Transition(row, col, CellState.VISITED, mark)

    def steps(self):
        grid = self.grid
        self.path = None
        self.found = False

        row, col = grid.entry
        self.explored = 1
        yield from self._visit(row, col, Mark.EXPLORED)
        stack = [((row, col), iter(self.ordered_directions(row, col)))]

        while stack:
            (row, col), directions = stack[-1]
            child = None
            for direction in directions:
                next_row, next_col = direction.step(row, col)
                if grid.is_passage(next_row, next_col):
                    child = (next_row, next_col)
                    break

            if child is None:
                stack.pop()
                if stack:
                    yield from self._visit(row, col, Mark.BACKTRACKED)
                continue

            self.explored += 1
            yield from self._visit(child[0], child[1], Mark.EXPLORED)
            if grid.is_exit(*child):
                for (path_row, path_col), _ in reversed(stack):
                    yield Transition(path_row, path_col, CellState.VISITED, Mark.ON_PATH)
                self.path = [cell for cell, _ in stack] + [child]
                self.found = True
                return
            stack.append((child, iter(self.ordered_directions(*child))))

    def solve(self, emit=None):
        for transition in self.steps():
            if emit is not None:
                emit(transition)
        return self.path
