# run_scraper.py
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from epic_free_games import config
from epic_free_games.errors import Err
from epic_free_games.main import scrape
from epic_free_games.models import FreeGame


def configure_logging(level: str, log_file: Optional[Path]) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)-8s - %(name)-25s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Log all debug messages to file
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Log records go to stderr so --json output on stdout stays machine-readable.
    rich_handler = RichHandler(
        level=level,
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
    )
    root_logger.addHandler(rich_handler)


def render_table(free_games: List[FreeGame]) -> Table:
    table = Table(title="Free on the Epic Games Store")
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("From", no_wrap=True)
    table.add_column("Until", no_wrap=True)
    table.add_column("Store page", overflow="fold")
    for game in free_games:
        table.add_row(
            game.title,
            game.start_date.strftime("%Y-%m-%d %H:%M") if game.start_date else "-",
            game.end_date.strftime("%Y-%m-%d %H:%M") if game.end_date else "-",
            game.store_url,
        )
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List the games the Epic Games Store is currently giving away.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help="Print the free games as JSON instead of a table."
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Console log level (default: INFO)."
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        help="Also write DEBUG-level logs to this file."
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=config.REQUEST_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {config.REQUEST_TIMEOUT:g})."
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        result = asyncio.run(scrape(timeout=args.timeout))
    except KeyboardInterrupt:
        logging.warning("Scrape interrupted by user.")
        return 130

    if isinstance(result, Err):
        logging.error("Scrape failed: %s", result.error)
        return 1

    free_games = result.value
    if args.json:
        print(json.dumps([game.to_dict() for game in free_games], indent=2, ensure_ascii=False))
    else:
        Console().print(render_table(free_games))
    return 0


if __name__ == "__main__":
    sys.exit(main())
