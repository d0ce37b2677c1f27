"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest

from gridpath.cli import EXIT_GRID_ERROR, EXIT_NO_PATH, EXIT_OK, build_parser, main
from gridpath.grid import PathResult, SearchStopReason


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "grid:\n"
        "  rows: 3\n"
        "  columns: 3\n"
        "logging:\n"
        "  level: WARNING\n"
    )
    return str(path)


class TestSolve:
    """solve command."""

    def test_text_output(self, config_file, capsys):
        code = main(["--config", config_file, "solve", "--rows", "1", "--columns", "3", "--goal", "0,2"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "| S   .   G |" in out
        assert "Path (0, 0) -> (0, 2): 2 steps" in out

    def test_json_output(self, config_file, capsys):
        code = main(["--config", config_file, "solve", "--goal", "2,2", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert data["success"] is True
        assert data["path"][0] == [0, 0]
        assert data["path"][-1] == [2, 2]
        assert len(data["path"]) == 5

    def test_rich_output(self, config_file, capsys):
        code = main(["--config", config_file, "solve", "--goal", "1,1", "--format", "rich"])
        assert code == EXIT_OK
        assert "G" in capsys.readouterr().out

    def test_seeded_goal(self, config_file, capsys):
        main(["--config", config_file, "solve", "--seed", "5", "--format", "json"])
        first = json.loads(capsys.readouterr().out)
        main(["--config", config_file, "solve", "--seed", "5", "--format", "json"])
        second = json.loads(capsys.readouterr().out)
        assert first["goal"] == second["goal"]
        assert first["goal"] != [0, 0]

    def test_no_path_exit_code(self, config_file, capsys):
        failed = PathResult([], SearchStopReason.NO_PATH_EXISTS, "No path from (0, 0) to (2, 2)")
        with patch("gridpath.grid.maze.Grid.find_best_path", return_value=failed):
            code = main(["--config", config_file, "solve", "--goal", "2,2"])
        assert code == EXIT_NO_PATH
        assert "No path" in capsys.readouterr().out

    def test_goal_at_start_is_grid_error(self, config_file, capsys):
        code = main(["--config", config_file, "solve", "--goal", "0,0"])
        assert code == EXIT_GRID_ERROR
        assert "Error" in capsys.readouterr().err

    def test_single_cell_grid(self, config_file):
        assert main(["--config", config_file, "solve", "--rows", "1", "--columns", "1"]) == EXIT_GRID_ERROR

    def test_bad_goal_syntax(self, config_file):
        with pytest.raises(SystemExit):
            main(["--config", config_file, "solve", "--goal", "two"])


class TestCell:
    """cell command."""

    def test_corner(self, config_file, capsys):
        code = main(["--config", config_file, "cell", "0", "0"])
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == "(0, 0): (1, 0), (0, 1)"

    def test_out_of_bounds(self, config_file, capsys):
        code = main(["--config", config_file, "cell", "3", "0"])
        assert code == EXIT_GRID_ERROR
        assert "outside a 3x3 grid" in capsys.readouterr().err


class TestParser:
    """Argument parsing."""

    def test_no_command(self, config_file, capsys):
        assert main(["--config", config_file]) == 1
        assert "usage" in capsys.readouterr().out

    def test_solve_defaults(self):
        args = build_parser().parse_args(["solve"])
        assert args.rows is None
        assert args.format is None
        assert args.goal is None


class TestEnvironment:
    """Environment overrides reaching the CLI."""

    def test_malformed_rows_override(self, config_file, capsys, monkeypatch):
        monkeypatch.setenv("GRIDPATH_ROWS", "abc")
        code = main(["--config", config_file, "solve", "--goal", "2,2", "--format", "json"])
        assert code == EXIT_OK
        assert json.loads(capsys.readouterr().out)["rows"] == 3
