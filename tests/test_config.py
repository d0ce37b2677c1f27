"""Tests for configuration loading."""

import logging

import pytest

from gridpath.config import (
    Config,
    GridConfig,
    LoggingConfig,
    SearchConfig,
    load_config,
    setup_logging,
)
from gridpath.grid.search import DEFAULT_MAX_REOPENS

ENV_VARS = [
    "GRIDPATH_ROWS",
    "GRIDPATH_COLUMNS",
    "GRIDPATH_SEED",
    "GRIDPATH_HEURISTIC",
    "GRIDPATH_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """YAML loading and env overrides."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config == Config()

    def test_yaml_sections(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "grid:\n"
            "  rows: 4\n"
            "  columns: 6\n"
            "  goal: [3, 5]\n"
            "search:\n"
            "  heuristic: manhattan\n"
            "  max_reopens: 2\n"
            "render:\n"
            "  format: json\n"
        )
        config = load_config(str(path))
        assert config.grid.rows == 4
        assert config.grid.columns == 6
        assert config.grid.goal_position() == (3, 5)
        assert config.search.heuristic == "manhattan"
        assert config.search.max_reopens == 2
        assert config.render.format == "json"
        assert config.logging.level == "INFO"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == Config()

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GRIDPATH_ROWS", "3")
        monkeypatch.setenv("GRIDPATH_COLUMNS", "11")
        monkeypatch.setenv("GRIDPATH_SEED", "7")
        monkeypatch.setenv("GRIDPATH_HEURISTIC", "manhattan")
        monkeypatch.setenv("GRIDPATH_LOG_LEVEL", "DEBUG")
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config.grid.rows == 3
        assert config.grid.columns == 11
        assert config.grid.seed == 7
        assert config.search.heuristic == "manhattan"
        assert config.logging.level == "DEBUG"

    def test_invalid_format_falls_back(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("render:\n  format: svg\n")
        assert load_config(str(path)).render.format == "text"

    def test_bundled_default(self):
        """The repository's config/default.yaml parses."""
        config = load_config()
        assert config.grid.rows > 0
        assert config.grid.goal_position() is None
        assert config.search.max_reopens == DEFAULT_MAX_REOPENS
        assert config.render.show_summary is True

    def test_malformed_env_integer_keeps_value(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("GRIDPATH_ROWS", "ten")
        monkeypatch.setenv("GRIDPATH_SEED", "4.5")
        monkeypatch.setenv("GRIDPATH_COLUMNS", "6")
        with caplog.at_level(logging.WARNING):
            config = load_config(str(tmp_path / "missing.yaml"))
        assert config.grid.rows == GridConfig().rows
        assert config.grid.seed is None
        assert config.grid.columns == 6
        assert "GRIDPATH_ROWS" in caplog.text
        assert "GRIDPATH_SEED" in caplog.text


class TestSearchConfig:
    """Heuristic name handling."""

    def test_known_heuristic(self):
        assert SearchConfig(heuristic="Manhattan").get_heuristic() == "manhattan"

    def test_unknown_heuristic_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert SearchConfig(heuristic="octile").get_heuristic() == "euclidean"
        assert "octile" in caplog.text


class TestSetupLogging:
    """Logging configuration."""

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "gridpath.log"
        setup_logging(LoggingConfig(level="DEBUG", file=str(log_file)))
        try:
            logging.getLogger("gridpath.test").debug("hello")
            for handler in logging.getLogger().handlers:
                handler.flush()
            assert log_file.exists()
            assert "hello" in log_file.read_text()
            assert logging.getLogger().level == logging.DEBUG
        finally:
            for handler in list(logging.getLogger().handlers):
                if isinstance(handler, logging.FileHandler):
                    logging.getLogger().removeHandler(handler)
                    handler.close()

    def test_unknown_level_defaults_to_info(self):
        setup_logging(LoggingConfig(level="LOUD"))
        assert logging.getLogger().level == logging.INFO
