"""Terminal reporting with rich."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from runwright.core.models import RunSummary, TestOutcome, TestResult

OUTCOME_STYLES = {
    TestOutcome.PASSED: ("green", "✓"),
    TestOutcome.FAILED: ("red", "✗"),
    TestOutcome.ERROR: ("magenta", "!"),
    TestOutcome.TIMED_OUT: ("yellow", "⏱"),
}


class TerminalReporter:
    """Prints a run summary and per-test details."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def report(self, results: list[TestResult]) -> RunSummary:
        """Print the report and return the computed summary."""
        summary = RunSummary.from_results(results)
        self._print_summary(summary)

        if not results:
            self.console.print("\n[yellow]No tests were run[/yellow]")
            return summary

        self._print_details(results)

        if summary.success:
            self.console.print("\n[green]All tests passed![/green]")
        else:
            self.console.print("\n[red]Some tests did not pass![/red]")
        return summary

    def _print_summary(self, summary: RunSummary) -> None:
        self.console.print("\n" + "=" * 50)
        self.console.print("[bold]Test Execution Report[/bold]")
        self.console.print("=" * 50)

        table = Table(show_header=False, box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")

        table.add_row("Total Tests", str(summary.total))
        table.add_row("Passed", f"[green]{summary.passed}[/green]")
        table.add_row("Failed", f"[red]{summary.failed}[/red]")
        table.add_row("Errors", f"[magenta]{summary.errors}[/magenta]")
        table.add_row("Timed Out", f"[yellow]{summary.timed_out}[/yellow]")
        table.add_row("Total Duration", f"{summary.duration:.2f}s")

        if summary.total > 0:
            pass_rate = (summary.passed / summary.total) * 100
            table.add_row("Pass Rate", f"{pass_rate:.1f}%")

        self.console.print(table)

    def _print_details(self, results: list[TestResult]) -> None:
        table = Table(title="Detailed Results")
        table.add_column("Test", style="cyan")
        table.add_column("Tags", style="dim")
        table.add_column("Outcome")
        table.add_column("Duration", justify="right")
        table.add_column("Message")

        for result in sorted(results, key=lambda r: r.test_name):
            if result.passed and not self.verbose:
                continue
            style, symbol = OUTCOME_STYLES[result.outcome]
            table.add_row(
                escape(result.test_name),
                escape(", ".join(result.tags)) or "-",
                f"[{style}]{symbol} {result.outcome.value}[/{style}]",
                f"{result.duration * 1000:.2f} ms",
                escape(result.message or ""),
            )

        if table.row_count:
            self.console.print(table)
