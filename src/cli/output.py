"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
notices, spinners, the dry run tree preview and the duplication summary.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from src.page_tree.models import DuplicationReport, Node


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Processing..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display a spinner while a single long operation runs.

        Example:
            >>> with handler.spinner("Duplicating pages..."):
            ...     pass
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_tree_preview(self, entries: List[Tuple[int, Node]], copy_suffix: str) -> None:
        """Display the pages a duplication would create.

        Args:
            entries: (depth, node) pairs from TreeDuplicator.preview_tree
            copy_suffix: Suffix the copies will carry
        """
        self.console.print("\n[bold]Dry Run - Pages to duplicate:[/bold]")
        for depth, node in entries:
            indent = "  " * (depth + 1)
            self.console.print(
                f"{indent}• {escape(node.title + copy_suffix)} "
                f"[dim](from {node.node_id}, {node.status.value})[/dim]"
            )

        if entries:
            self.console.print(f"\n[green]Would create {len(entries)} draft page(s)[/green]")
        else:
            self.console.print("\n[yellow]No pages to duplicate[/yellow]")

    def print_duplication_summary(
        self,
        report: DuplicationReport,
        failed_node_id: Optional[str] = None,
    ) -> None:
        """Display what a duplication created.

        Args:
            report: Report returned by (or carried in the abort of) duplicate_tree
            failed_node_id: Page that stopped a strict run, if any
        """
        self.console.print("\n[bold]Duplication Summary:[/bold]")

        if report.new_root_id:
            self.console.print(
                f"  [green]+[/green] New root page: {report.new_root_id} "
                f"(copy of {report.source_root_id})"
            )
        self.console.print(f"  [green]+[/green] Created: {report.created_count} page(s)")

        if report.partial:
            self.console.print(
                f"  [yellow]⚠[/yellow] Missing metadata: {len(report.partial)} page(s) "
                f"({', '.join(report.partial.values())})"
            )

        if failed_node_id:
            self.console.print(f"  [red]✗[/red] Failed at page: {failed_node_id}")

        if self.verbosity >= 1:
            for source_id, new_id in report.created.items():
                self.console.print(f"  [dim]{source_id} → {new_id}[/dim]")
