"""Configuration management for gridpath."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .grid.search import DEFAULT_HEURISTIC, DEFAULT_MAX_REOPENS, HEURISTICS

logger = logging.getLogger(__name__)

RENDER_FORMATS = ("text", "rich", "json")


@dataclass
class GridConfig:
    """Grid dimensions and goal selection."""

    rows: int = 8
    columns: int = 12
    # Seed for the goal sampler (None = nondeterministic)
    seed: Optional[int] = None
    # Fixed goal as [row, col]; sampled when unset
    goal: Optional[list[int]] = None

    def goal_position(self) -> Optional[tuple[int, int]]:
        if self.goal is None:
            return None
        row, col = self.goal
        return (int(row), int(col))


@dataclass
class SearchConfig:
    """Search tuning."""

    heuristic: str = DEFAULT_HEURISTIC
    # Cap on OPEN selections (None = 4x the cell count)
    max_iterations: Optional[int] = None
    max_reopens: int = DEFAULT_MAX_REOPENS

    def get_heuristic(self) -> str:
        """Get the heuristic name, falling back to the default if unknown."""
        name = self.heuristic.lower()
        if name not in HEURISTICS:
            logger.warning(f"Invalid heuristic '{self.heuristic}', defaulting to {DEFAULT_HEURISTIC}")
            return DEFAULT_HEURISTIC
        return name


@dataclass
class RenderConfig:
    """Output settings."""

    format: str = "text"
    show_summary: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration container."""

    grid: GridConfig = field(default_factory=GridConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Defaults to config/default.yaml

    Returns:
        Populated Config dataclass
    """
    if config_path is None:
        candidates = [
            Path("config/default.yaml"),
            Path(__file__).parent.parent / "config" / "default.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                config_path = str(candidate)
                break

    config = Config()

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            data = yaml.safe_load(f)

        if data:
            if "grid" in data:
                config.grid = GridConfig(**data["grid"])
            if "search" in data:
                config.search = SearchConfig(**data["search"])
            if "render" in data:
                config.render = RenderConfig(**data["render"])
            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])

    # Environment variable overrides
    config.grid.rows = _env_int("GRIDPATH_ROWS", config.grid.rows)
    config.grid.columns = _env_int("GRIDPATH_COLUMNS", config.grid.columns)
    config.grid.seed = _env_int("GRIDPATH_SEED", config.grid.seed)
    if os.environ.get("GRIDPATH_HEURISTIC"):
        config.search.heuristic = os.environ["GRIDPATH_HEURISTIC"]
    if os.environ.get("GRIDPATH_LOG_LEVEL"):
        config.logging.level = os.environ["GRIDPATH_LOG_LEVEL"]

    if config.render.format not in RENDER_FORMATS:
        logger.warning(f"Invalid render format '{config.render.format}', defaulting to text")
        config.render.format = "text"

    return config


def _env_int(name: str, current: Optional[int]) -> Optional[int]:
    """Read an integer override, keeping the current value if unset or malformed."""
    value = os.environ.get(name)
    if not value:
        return current
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid {name} value '{value}', keeping {current}")
        return current


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure logging based on configuration.

    Args:
        config: Logging configuration
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.file))

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
        force=True,
    )

    logger.debug(f"Logging configured at level {config.level}")
