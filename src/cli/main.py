"""Main CLI entry point for the page-tree-copy command.

This module provides the Typer application that serves as the entry point
for the page-tree-copy command-line tool. A single command takes the page
to copy plus options.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.duplicate_command import DuplicateCommand
from src.cli.output import OutputHandler
from src.page_tree.config_loader import DEFAULT_CONFIG_PATH
from src.page_tree.models import DuplicationMode

__version__ = "0.1.0"

app = typer.Typer(
    name="page-tree-copy",
    help="Duplicate a Confluence page and all its subpages as drafts.",
    add_completion=False,
    rich_markup_mode=None,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure the 'src' logger for the given verbosity.

    Third-party loggers and the root logger are left alone.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for a timestamped log file
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    # Handlers from an earlier invocation in the same process
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    date_format = "%Y-%m-%d %H:%M:%S"
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)
    )
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"page-tree-copy_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
            )
        )
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"page-tree-copy version {__version__}")
        raise typer.Exit()


@app.command()
def main_command(
    source: str = typer.Argument(
        ...,
        help="Page ID or Confluence page URL of the root page to copy",
        metavar="PAGE",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Stop at the first page that cannot be copied (default: skip it and continue)",
        show_default=False,
    ),
    suffix: Optional[str] = typer.Option(
        None,
        "--suffix",
        help="Text appended to every copied title (default: ' (Copy)')",
    ),
    config_path: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the YAML configuration file",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="List the pages that would be copied without creating anything",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Duplicate a Confluence page and all its subpages.

    Every copy is created as a draft, keeps its content properties and gets
    the copy suffix appended to its title. The copy of the root page is
    created at the top level of the space.

    \b
    EXAMPLES:
      page-tree-copy 123456
      page-tree-copy https://company.atlassian.net/wiki/spaces/TEAM/pages/123456
      page-tree-copy 123456 --dry-run
      page-tree-copy 123456 --strict --suffix " (Archive)"

    \b
    Required environment variables (or a .env file):
      CONFLUENCE_URL, CONFLUENCE_USER, CONFLUENCE_API_TOKEN
    """
    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    mode = None
    if strict is not None:
        mode = DuplicationMode.STRICT if strict else DuplicationMode.LENIENT

    command = DuplicateCommand(config_path=config_path, output_handler=output)
    exit_code = command.run(
        source,
        dry_run=dry_run,
        mode=mode,
        copy_suffix=suffix,
    )

    raise typer.Exit(int(exit_code))


def main() -> None:
    """Console script entry point."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
