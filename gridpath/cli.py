"""
Command-line interface for gridpath.

Usage:
    python -m gridpath.cli solve                      Solve a grid from config
    python -m gridpath.cli solve --rows 5 --columns 9 --goal 4,7
    python -m gridpath.cli solve --format json        Dump the result as JSON
    python -m gridpath.cli cell 2 3                   Show a cell's neighbors
"""

import argparse
import json
import logging
import sys

from rich.console import Console

from gridpath.config import Config, load_config, setup_logging
from gridpath.grid import Grid, GridError, Position, render_json, render_rich, render_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_PATH = 1
EXIT_GRID_ERROR = 2


def _parse_goal(value: str) -> tuple[int, int]:
    try:
        row, col = (int(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Goal must look like ROW,COL, got '{value}'") from None
    return (row, col)


def _build_grid(args: argparse.Namespace, config: Config) -> Grid:
    """Build a grid from config, with CLI flags taking precedence."""
    rows = args.rows if args.rows is not None else config.grid.rows
    columns = args.columns if args.columns is not None else config.grid.columns
    seed = getattr(args, "seed", None)
    if seed is None:
        seed = config.grid.seed
    goal = getattr(args, "goal", None) or config.grid.goal_position()
    return Grid(rows, columns, goal=goal, seed=seed)


def cmd_solve(args: argparse.Namespace, config: Config) -> int:
    """Build a grid, search it and print the result."""
    if args.heuristic:
        config.search.heuristic = args.heuristic
    output_format = args.format or config.render.format

    grid = _build_grid(args, config)
    result = grid.find_best_path(
        heuristic=config.search.get_heuristic(),
        max_iterations=config.search.max_iterations,
        max_reopens=config.search.max_reopens,
    )

    if output_format == "json":
        print(json.dumps(render_json(grid, result), indent=2))
    elif output_format == "rich":
        Console().print(render_rich(grid, result))
    else:
        print(render_text(grid, result))

    if config.render.show_summary and output_format != "json":
        if result.success:
            print(f"Path {grid.start} -> {grid.goal}: {len(result) - 1} steps, "
                  f"{result.expanded} cells closed")
        else:
            print(f"No path: {result.message}")

    return EXIT_OK if result.success else EXIT_NO_PATH


def cmd_cell(args: argparse.Namespace, config: Config) -> int:
    """Print the neighbors of one cell."""
    grid = _build_grid(args, config)
    cell = grid.cell(Position(args.row, args.col))
    neighbors = ", ".join(str(p) for p in cell.neighbors)
    print(f"{cell.position}: {neighbors}")
    return EXIT_OK


def _add_grid_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rows", type=int, default=None, help="Number of rows")
    parser.add_argument("--columns", type=int, default=None, help="Number of columns")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="gridpath - shortest paths on rectangular grids",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level override",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # solve command
    solve_parser = subparsers.add_parser("solve", help="Find a path from start to goal")
    _add_grid_arguments(solve_parser)
    solve_parser.add_argument("--seed", type=int, default=None, help="Seed for the goal sampler")
    solve_parser.add_argument("--goal", type=_parse_goal, default=None, help="Fixed goal as ROW,COL")
    solve_parser.add_argument(
        "--format",
        "-f",
        choices=["text", "rich", "json"],
        default=None,
        help="Output format",
    )
    solve_parser.add_argument(
        "--heuristic",
        choices=["euclidean", "manhattan"],
        default=None,
        help="Distance estimate to the goal",
    )
    solve_parser.set_defaults(func=cmd_solve)

    # cell command
    cell_parser = subparsers.add_parser("cell", help="Show the neighbors of a cell")
    cell_parser.add_argument("row", type=int)
    cell_parser.add_argument("col", type=int)
    _add_grid_arguments(cell_parser)
    cell_parser.set_defaults(func=cmd_cell)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config.logging)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args, config)
    except GridError as e:
        logger.error(f"{e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_GRID_ERROR


if __name__ == "__main__":
    sys.exit(main())
