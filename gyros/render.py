"""
Rendering functions for gyros output.

Relays captured command output per repository and prints the run
summary. Headers and annotations are styled with rich; captured output is
written to the streams untouched.
"""

import json
import sys
from typing import Iterable, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .domain.repository import CheckoutState, ExecutionResult, RepositoryEntry, RunSummary


def header_text(label: str) -> str:
    return f"\n<>--------<> {label} <>--------<>\n"


def failure_annotation(result: ExecutionResult) -> str:
    """One-line note naming the repository of a failed result."""
    alias = result.repository.alias
    if result.checkout_state == CheckoutState.FAILED:
        return f"'{alias}' failed to checkout branch and fallback"
    if not result.spawned:
        return f"'{alias}' could not run: {result.spawn_error}"
    return f"'{alias}' failed"


class Reporter:
    """
    Human-readable reporter.

    Each result is rendered as a header on stdout, then the captured
    stdout to stdout and the captured stderr to stderr. The summary goes
    to stderr when anything failed, otherwise to stdout.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.console = Console(file=self.out, highlight=False, soft_wrap=True)
        self.err_console = Console(file=self.err, highlight=False, soft_wrap=True)

    def render_header(self, label: str) -> None:
        self.console.print(Text(header_text(label), style="bold green"), end="")
        self.out.flush()

    def render_result(self, result: ExecutionResult) -> None:
        """Relay a result's captured output, with any notices first."""
        for notice in result.notices:
            self.err_console.print(Text(notice, style="yellow"))

        self.out.write(result.stdout)
        self.out.flush()
        self.err.write(result.stderr)
        self.err.flush()

        if not result.exit_succeeded:
            self.err_console.print(Text(failure_annotation(result), style="red italic"))

    def render(self, result: ExecutionResult) -> None:
        self.render_header(result.repository.label)
        self.render_result(result)

    def render_summary(self, summary: RunSummary) -> None:
        if summary.failed > 0:
            self.err_console.print(Text(f"\n{summary}", style="bold red"))
        else:
            self.console.print(Text(f"\n{summary}", style="bold green"))

    def render_error(self, message: str) -> None:
        """Fatal error before any dispatch."""
        self.err_console.print(Text(f"Error: {message}", style="red italic"))

    def render_entries(self, repos: Iterable[RepositoryEntry]) -> None:
        """Table of resolved repositories."""
        table = Table(show_header=True, header_style="bold cyan", title="Repositories")
        table.add_column("Alias", style="green")
        table.add_column("Path", style="white")
        for repo in repos:
            table.add_row(repo.alias, repo.path)
        self.console.print(table)


class JsonReporter(Reporter):
    """JSONL reporter: one object per result, then the summary object."""

    def render_header(self, label: str) -> None:
        pass

    def render_result(self, result: ExecutionResult) -> None:
        print(json.dumps(result.to_dict(), ensure_ascii=False), file=self.out, flush=True)

    def render_summary(self, summary: RunSummary) -> None:
        stream = self.err if summary.failed > 0 else self.out
        print(json.dumps(summary.to_dict()), file=stream, flush=True)

    def render_error(self, message: str) -> None:
        print(json.dumps({'error': message}), file=self.err, flush=True)

    def render_entries(self, repos: Iterable[RepositoryEntry]) -> None:
        for repo in repos:
            print(json.dumps(repo.to_dict()), file=self.out, flush=True)
