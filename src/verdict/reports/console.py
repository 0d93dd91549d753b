"""Console reporter for failure reports using Rich."""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from verdict.facts import FailureReport


class ConsoleReporter:
    """Print failure reports as Rich panels, one per report."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(file=sys.__stdout__)

    def _print_section_header(self, title: str) -> None:
        width = self.console.width
        header_title = f" {title} "
        fill = max(width - len(header_title), 0)
        left = fill // 2
        right = fill - left
        self.console.print("=" * left + header_title + "=" * right)

    def _format_report(self, report: FailureReport) -> list[str]:
        lines = [f"[dim]{escape(message)}[/dim]" for message in report.messages]
        for fact in report.facts:
            if fact.value is None:
                lines.append(f"[bold]{escape(fact.key)}[/bold]")
            elif "\n" in fact.value:
                lines.append(f"[cyan]{escape(fact.key)}[/cyan]:")
                lines.append(escape(textwrap.indent(fact.value, "    ")))
            else:
                lines.append(f"[cyan]{escape(fact.key)}[/cyan]: {escape(fact.value)}")
        return lines

    def _build_failure_panel(self, title: str, report: FailureReport) -> Panel:
        return Panel(
            "\n".join(self._format_report(report)) or " ",
            title=title,
            title_align="left",
            border_style="red",
            expand=True,
            padding=(1, 1),
        )

    def print_report(self, report: FailureReport, title: str = "FAILED") -> None:
        self.console.print(self._build_failure_panel(title, report))

    def print_reports(self, reports: Sequence[FailureReport]) -> None:
        """Print every report followed by a summary line."""
        if reports:
            self._print_section_header("FAILURES")
            for index, report in enumerate(reports, start=1):
                if index > 1:
                    self.console.print()
                self.print_report(report, title=f"failure {index}")
        self._print_section_header("SUMMARY")
        if reports:
            summary = f"[red]{len(reports)} failed[/red]"
        else:
            summary = "[green]all assertions passed[/green]"
        self.console.print(f"[bold]{summary}[/bold]", justify="center")
        self.console.print("=" * self.console.width)
