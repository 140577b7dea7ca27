import matplotlib
matplotlib.use('Agg')

import os
import random
import shutil

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
import matplotlib.patches as patches
from tqdm import tqdm

from maze_generators import Variant, generate, new_grid
from maze_grid import CellState, Mark
from maze_solver import Solver

FIG_WIDTH = 9
FIG_HEIGHT = 11
DPI = 100

BG_COLOR = '#0A0A15'
WALL_COLOR = '#FFFFFF'
PASSAGE_COLOR = '#0A0A15'
CURRENT_COLOR = '#FF1493'
VISITED_COLOR = '#FFD700'
BACKTRACK_COLOR = '#3A1C71'
PATH_COLOR = '#FF3333'
START_COLOR = '#00FF7F'
END_COLOR = '#FF4500'

GEN_DURATION = 5
SOLVE_DURATION = 10
TARGET_FPS = 30
GEN_FRAMES = GEN_DURATION * TARGET_FPS
SOLVE_FRAMES = SOLVE_DURATION * TARGET_FPS
HOLD_FRAMES = 30
TOTAL_FRAMES = GEN_FRAMES + SOLVE_FRAMES

PULSE_SPEED = 0.15

# view codes beyond CellState for marks that are only visible, never stored
BACKTRACKED = 7
ON_PATH = 8

VIEW_COLORS = {
    CellState.BORDER: WALL_COLOR,
    CellState.WALL: WALL_COLOR,
    CellState.PASSAGE: PASSAGE_COLOR,
    CellState.ENTRY: START_COLOR,
    CellState.EXIT: END_COLOR,
    CellState.CURRENT: CURRENT_COLOR,
    CellState.VISITED: VISITED_COLOR,
    BACKTRACKED: BACKTRACK_COLOR,
    ON_PATH: PATH_COLOR,
}


def view_code(transition):
    if transition.mark is Mark.BACKTRACKED:
        return BACKTRACKED
    if transition.mark is Mark.ON_PATH:
        return ON_PATH
    return int(transition.state)


def capture_state(view, current, phase, is_solution_phase=False):
    return {
        'view': view.copy(),
        'current': current,
        'phase': phase,
        'is_solution_phase': is_solution_phase,
    }


def record(variant, rows, cols, seed=None):
    """
    Generate and solve one maze, snapshotting the board after every
    transition. Returns (grid, generation_states, solving_states, path).
    """
    rng = random.Random(seed)
    grid = new_grid(variant, rows, cols, rng)
    view = grid.board.copy()
    generation_states = [capture_state(view, None, 'generation')]
    solving_states = []

    def on_carve(transition):
        view[transition.row, transition.col] = view_code(transition)
        generation_states.append(capture_state(view, (transition.row, transition.col), 'generation'))

    generate(grid, rng, variant, emit=on_carve)
    generation_states.append(capture_state(view, None, 'generation'))

    solver = Solver(grid)
    for transition in solver.steps():
        view[transition.row, transition.col] = view_code(transition)
        solving_states.append(capture_state(view, (transition.row, transition.col), 'solving',
                                            transition.mark is Mark.ON_PATH))
    if solving_states:
        solving_states.append(capture_state(view, None, 'solving', solver.found))
    return grid, generation_states, solving_states, solver.path


def sample_states(states, frame_count):
    total = len(states)
    if total == 0 or frame_count <= 0:
        return []
    return [states[min(int(i / frame_count * total), total - 1)] for i in range(frame_count)]


def create_animation_frames(generation_states, solving_states):
    frames = sample_states(generation_states, GEN_FRAMES)
    if solving_states:
        frames.extend(sample_states(solving_states[:-1] or solving_states, SOLVE_FRAMES - HOLD_FRAMES))
        frames.extend([solving_states[-1]] * HOLD_FRAMES)
    return frames


def create_animation(frames, rows, cols, algorithm_name, solving_method="Guided Depth-First Search"):
    cell_size = min(FIG_HEIGHT / (rows + 3), FIG_WIDTH / cols) * 0.9
    fig, axes = plt.subplots(figsize=(FIG_WIDTH, FIG_HEIGHT), dpi=DPI)
    fig.patch.set_facecolor(BG_COLOR)
    x_offset = (FIG_WIDTH - cols * cell_size) / 2
    y_offset = (FIG_HEIGHT - rows * cell_size) / 2 - cell_size
    gen_count = sum(1 for frame in frames if frame['phase'] == 'generation')
    solve_count = max(1, len(frames) - gen_count)

    def update(i):
        axes.clear()
        axes.set_xlim(0, FIG_WIDTH)
        axes.set_ylim(0, FIG_HEIGHT)
        axes.set_facecolor(BG_COLOR)
        axes.axis('off')

        frame = frames[i]
        view = frame['view']
        generation_phase = frame['phase'] == 'generation'
        top = y_offset + rows * cell_size

        if generation_phase:
            title_text = "Maze Generation"
            method = algorithm_name
            progress_percent = min(100, int(i / max(1, gen_count - 1) * 100))
        else:
            title_text = "Solution Path" if frame['is_solution_phase'] else "Exploring Maze"
            method = solving_method
            progress_percent = min(100, int((i - gen_count) / max(1, solve_count - 1) * 100))
        axes.text(FIG_WIDTH/2, top + 1.2, title_text, color='white', fontsize=20, ha='center', weight='bold')
        axes.text(FIG_WIDTH/2, top + 0.7, f"Algorithm used: {method}", color='white', fontsize=12, ha='center')
        axes.text(FIG_WIDTH/2, top + 0.3, f"Progress: {progress_percent}%", color='white', fontsize=12, ha='center')

        for row in range(rows):
            for col in range(cols):
                code = int(view[row, col])
                if code == CellState.PASSAGE:
                    continue
                cell_x = x_offset + col * cell_size
                cell_y = y_offset + (rows - 1 - row) * cell_size
                alpha = 0.9 if code in (CellState.BORDER, CellState.WALL) else 0.8
                axes.add_patch(patches.Rectangle(
                    (cell_x, cell_y), cell_size, cell_size,
                    fill=True, color=VIEW_COLORS[code], alpha=alpha, linewidth=0, zorder=5
                ))

        if frame['current'] is not None:
            row, col = frame['current']
            pulse_factor = 1.0 + 0.1 * np.sin(i * PULSE_SPEED)
            glow_size = cell_size * 1.2 * pulse_factor
            glow_offset = (cell_size - glow_size) / 2
            glow_color = CURRENT_COLOR if not generation_phase else START_COLOR
            axes.add_patch(patches.Rectangle(
                (x_offset + col * cell_size + glow_offset, y_offset + (rows - 1 - row) * cell_size + glow_offset),
                glow_size, glow_size,
                fill=False, edgecolor=glow_color, alpha=0.6, linewidth=1.5, zorder=20
            ))

    ani = animation.FuncAnimation(
        fig,
        update,
        frames=len(frames),
        blit=False,
        interval=1000 / TARGET_FPS,
        repeat=False
    )
    return ani, fig


class TqdmProgressCallback:
    def __init__(self, total):
        self.pbar = tqdm(total=total, desc="Saving Video", unit="frame", ncols=100)

    def __call__(self, current_frame, total_frames):
        self.pbar.update(1)

    def close(self):
        self.pbar.close()


def make_writer(output_file):
    if os.path.splitext(output_file)[1].lower() == '.gif':
        return animation.PillowWriter(fps=TARGET_FPS)
    ffmpeg_path = shutil.which('ffmpeg')
    if not ffmpeg_path:
        print("WARNING: ffmpeg not found. Animation saving will likely fail.")
        print("Please install ffmpeg and ensure it's in your system's PATH.")
    else:
        plt.rcParams['animation.ffmpeg_path'] = ffmpeg_path
    return animation.FFMpegWriter(
        fps=TARGET_FPS,
        metadata=dict(artist='Maze Generation & Solving'),
        bitrate=5000
    )


def save_animation(ani, fig, output_file, total_frames):
    progress_bar = TqdmProgressCallback(total_frames)
    try:
        ani.save(output_file, writer=make_writer(output_file), progress_callback=progress_bar)
        print(f"✅ Animation saved successfully to {output_file}")
        return True
    except Exception as e:
        print(f"❌ Error saving animation: {e}")
        print("   Ensure FFmpeg is installed and accessible in your system's PATH.")
        return False
    finally:
        progress_bar.close()
        plt.close(fig)


def export_video(variant, rows, cols, output_file, seed=None):
    gen_name = {
        Variant.CARVE_BACKTRACK: "Carve Backtrack (main road)",
        Variant.FRONTIER_EXPAND: "Frontier Expand (natural)",
        Variant.RECURSIVE_DIVISION: "Recursive Division (simple)",
    }[variant]

    print(f"🧩 Generating maze using {gen_name} ({rows}x{cols})...")
    grid, generation_states, solving_states, path = record(variant, rows, cols, seed=seed)
    print(f"🔍 Solving maze from {grid.entry} to {grid.exit}...")
    if path is None:
        print("❌ Solution not found.")
    else:
        print(f"   Path length: {len(path) - 1} steps")

    print(f"🎬 Creating {TOTAL_FRAMES} animation frames...")
    frames = create_animation_frames(generation_states, solving_states)

    print("🎨 Building animation...")
    ani, fig = create_animation(frames, rows, cols, gen_name)

    print(f"💾 Saving animation to {output_file}...")
    print("    (This may take several minutes for high quality)")
    return save_animation(ani, fig, output_file, len(frames))
