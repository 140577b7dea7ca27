import numpy as np
import pytest

import maze_video
from maze_generators import Variant
from maze_grid import CellState


@pytest.fixture(scope='module')
def recording():
    return maze_video.record(Variant.CARVE_BACKTRACK, 9, 9, seed=6)


def test_record_snapshots_both_phases(recording):
    grid, generation_states, solving_states, path = recording
    assert path[0] == grid.entry and path[-1] == grid.exit
    assert all(state['phase'] == 'generation' for state in generation_states)
    assert all(state['phase'] == 'solving' for state in solving_states)

    first = generation_states[0]['view']
    assert (first[1:-1, 1:-1] == CellState.WALL).all()
    last_generation = generation_states[-1]['view']
    assert (last_generation == CellState.PASSAGE).sum() == 2 * 16 - 1


def test_final_view_marks_the_path(recording):
    grid, _, solving_states, path = recording
    final = solving_states[-1]
    assert final['is_solution_phase']
    assert final['current'] is None
    assert (final['view'] == maze_video.ON_PATH).sum() == len(path) - 1
    assert final['view'][grid.exit] == CellState.CURRENT


def test_snapshots_are_independent(recording):
    _, generation_states, _, _ = recording
    assert not np.array_equal(generation_states[0]['view'], generation_states[-1]['view'])


def test_sample_states():
    states = list(range(10))
    assert maze_video.sample_states(states, 5) == [0, 2, 4, 6, 8]
    assert maze_video.sample_states(states, 20)[:3] == [0, 0, 1]
    assert maze_video.sample_states([], 5) == []


def test_animation_frames_fill_the_budget(recording):
    _, generation_states, solving_states, _ = recording
    frames = maze_video.create_animation_frames(generation_states, solving_states)
    assert len(frames) == maze_video.TOTAL_FRAMES
    assert frames[0] is generation_states[0]
    assert frames[-maze_video.HOLD_FRAMES:] == [solving_states[-1]] * maze_video.HOLD_FRAMES


def test_save_small_gif(recording, tmp_path):
    _, generation_states, solving_states, _ = recording
    frames = [generation_states[0], solving_states[len(solving_states) // 2], solving_states[-1]]
    ani, fig = maze_video.create_animation(frames, 9, 9, "Carve Backtrack (main road)")
    output_file = tmp_path / 'maze.gif'
    assert maze_video.save_animation(ani, fig, str(output_file), len(frames))
    assert output_file.exists()


def test_every_view_code_has_a_colour(recording):
    _, generation_states, solving_states, _ = recording
    codes = set()
    for state in generation_states + solving_states:
        codes.update(int(code) for code in np.unique(state['view']))
    assert codes <= set(maze_video.VIEW_COLORS)
    assert {maze_video.BACKTRACKED, maze_video.ON_PATH} <= set(maze_video.VIEW_COLORS)
