"""Console reporter: SequenceNotFoundError -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from seqcheck.application.verification.formatter import PROPERTY_NOTE, SequenceFormatter

if TYPE_CHECKING:
    from seqcheck.domain.exceptions import SequenceNotFoundError


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        force_terminal: Emit ANSI styles even when not writing to a tty.
        width: Console width in characters.
        max_argument_length: Truncate argument reprs. None = unlimited.
        show_note: Show the property-getter note.
    """

    force_terminal: bool = False
    width: int = 120
    max_argument_length: int | None = None
    show_note: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 20:
            raise ValueError(f"width must be >= 20, got {self.width}")


class ConsoleReporter:
    """Console reporter: expected and actual sequences as tables.

    The mismatching position (exact order) or unmatched specification
    (any order) is highlighted.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, error: SequenceNotFoundError) -> str:
        """Format mismatch as rich formatted string."""
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.force_terminal,
            width=self._config.width,
        )
        formatter = SequenceFormatter(
            error.expected,
            error.actual,
            self._config.max_argument_length,
        )

        console.rule("[bold]CALL SEQUENCE NOT FOUND[/bold]")
        console.print()
        console.print(self._expected_table(error, formatter))
        console.print()
        console.print(self._actual_table(error, formatter))

        if error.failure_message is not None:
            console.print()
            console.print("[bold red]Assertion failure[/bold red]")
            console.print(error.failure_message, markup=False, highlight=False)

        if self._config.show_note:
            console.print()
            console.print(PROPERTY_NOTE, style="dim", markup=False)

        return output.getvalue()

    def _expected_table(self, error: SequenceNotFoundError, formatter: SequenceFormatter) -> Table:
        """Expected specifications, failing row highlighted."""
        table = Table(title="Expected", title_justify="left", show_header=True, header_style="bold", box=None)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Call")
        table.add_column("", style="bold red")

        for position, spec in enumerate(error.expected):
            failing = position == error.mismatch_index or spec is error.unmatched
            table.add_row(
                str(position + 1),
                Text(formatter.format_specification(spec)),
                "<- not found" if failing else "",
                style="red" if failing else None,
            )
        return table

    def _actual_table(self, error: SequenceNotFoundError, formatter: SequenceFormatter) -> Table:
        """Actual calls with their sequence numbers."""
        title = "Received" if error.unmatched is None else "Remaining"
        table = Table(title=title, title_justify="left", show_header=True, header_style="bold", box=None)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Seq", style="cyan", justify="right")
        table.add_column("Call")

        if not error.actual:
            table.add_row("-", "-", "(no calls)")
        for position, call in enumerate(error.actual):
            style = "red" if position == error.mismatch_index else None
            table.add_row(
                str(position + 1),
                str(call.sequence_number),
                Text(formatter.format_call(call)),
                style=style,
            )
        return table
