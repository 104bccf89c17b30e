"""Rich-based display of validation results.

Provides a table renderer for :class:`~field_rules.results.Result` and an
observer that prints it when a run completes.

Requires the 'rich' package: pip install rich
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from field_rules.audit import rule_name
from field_rules.events import ValidationEvent, ValidationEventType

if TYPE_CHECKING:
    from rich.console import Console
    from rich.table import Table

    from field_rules.results import Result

__all__ = ["RichResultObserver", "result_table"]


def result_table(result: Result, title: str | None = "Validation Result") -> Table:
    """Build a Rich table listing every validated and failed field.

    Args:
        result: The result to render.
        title: Table title. None for no title.

    Returns:
        A Rich Table with one row per field.
    """
    from rich.table import Table

    table = Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
        expand=True,
    )
    table.add_column("Field", style="cyan", width=20)
    table.add_column("Status", width=8)
    table.add_column("Rule", style="yellow", width=16)
    table.add_column("Message")

    for field in result.get_validated():
        table.add_row(field, "[green]✓ ok[/]", "-", "-")

    for error in result.errors:
        # Truncate long messages
        message = error.message[:80] + "..." if len(error.message) > 80 else error.message
        table.add_row(error.field, "[red]✗ fail[/]", rule_name(error.rule) or "-", message)

    if not result.get_validated() and not result.has_errors:
        table.add_row("-", "-", "-", "No fields processed")

    return table


class RichResultObserver:
    """Print a summary table to a Rich console after every run.

    Example:
        observer = RichResultObserver()
        validator.add_observer(observer)
        validator.run(record)  # table printed on completion

    Requires:
        pip install rich
    """

    def __init__(self, console: Console | None = None, *, show_valid: bool = True) -> None:
        """Initialize the observer.

        Args:
            console: Rich Console instance. If None, creates a new one.
            show_valid: If False, only print runs that had failures.
        """
        # Import Rich components here to make them optional
        from rich.console import Console

        self._console = console or Console()
        self._show_valid = show_valid

    @property
    def console(self) -> Console:
        return self._console

    def on_event(self, event: ValidationEvent) -> None:
        """Handle validation events, printing on RUN_COMPLETED."""
        if event.event_type != ValidationEventType.RUN_COMPLETED:
            return

        is_valid = bool(event.data.get("is_valid"))
        if is_valid and not self._show_valid:
            return

        result = event.data.get("result")
        if result is not None:
            self._console.print(result_table(result))

        validated = event.data.get("validated_count", 0)
        errors = event.data.get("error_count", 0)
        status = "[bold green]VALID[/]" if is_valid else "[bold red]INVALID[/]"
        self._console.print(f"{status}  validated: {validated}  errors: {errors}")
