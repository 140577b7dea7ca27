import pytest

import maze_cli
import maze_video
from maze_generators import Variant


@pytest.fixture
def big_terminal(monkeypatch):
    monkeypatch.setattr(maze_cli, 'terminal_size', lambda: (60, 200))


def test_resolve_size():
    assert maze_cli.resolve_size(None, None) == (21, 21)
    assert maze_cli.resolve_size(11, None) == (11, 11)
    assert maze_cli.resolve_size(11, 15) == (11, 15)


def test_unknown_algorithm_prints_usage(big_terminal, capsys):
    assert maze_cli.main(['maze']) == 1
    err = capsys.readouterr().err
    assert "Unknown algorithm 'maze'" in err
    assert maze_cli.USAGE in err


@pytest.mark.parametrize("argv", [['simple', '20'], ['mainroad', '4'], ['natual', '11', '12']])
def test_invalid_dimensions_fail(big_terminal, capsys, argv):
    assert maze_cli.main(argv) == 1
    assert "odd numbers" in capsys.readouterr().err


def test_display_too_small_fails(monkeypatch, capsys):
    monkeypatch.setattr(maze_cli, 'terminal_size', lambda: (24, 80))
    assert maze_cli.main(['simple', '23']) == 1
    assert "exceeds the terminal display range" in capsys.readouterr().err


def test_malformed_number_is_an_argparse_error(big_terminal):
    with pytest.raises(SystemExit) as excinfo:
        maze_cli.main(['simple', 'eleven'])
    assert excinfo.value.code == 2


@pytest.mark.parametrize("argv", [
    ['--delay', '0', '--seed', '1'],
    ['mainroad', '5', '--delay', '0', '--seed', '2'],
    ['simple', '7', '9', '--delay', '0', '--seed', '3'],
])
def test_successful_run_draws_the_maze(big_terminal, capsys, argv):
    assert maze_cli.main(argv) == 0
    out = capsys.readouterr().out
    assert '\033[2J' in out
    assert out.endswith('\033[?25h')


def test_video_skips_terminal_check(monkeypatch):
    calls = []
    monkeypatch.setattr(maze_cli, 'terminal_size', lambda: (5, 5))
    monkeypatch.setattr(maze_video, 'export_video',
                        lambda variant, rows, cols, output_file, seed=None: calls.append(
                            (variant, rows, cols, output_file, seed)) or True)
    assert maze_cli.main(['natual', '31', '--video', 'out.mp4', '--seed', '7']) == 0
    assert calls == [(Variant.FRONTIER_EXPAND, 31, 31, 'out.mp4', 7)]


def test_video_failure_is_reported_as_exit_code(monkeypatch):
    monkeypatch.setattr(maze_video, 'export_video', lambda *args, **kwargs: False)
    assert maze_cli.main(['simple', '--video', 'out.gif']) == 1
