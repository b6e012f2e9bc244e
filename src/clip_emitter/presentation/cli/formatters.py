"""Rich formatting utilities for the CLI.

Keeps all Rich rendering (tables, panels, syntax) in one module that knows
nothing about how events are produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from clip_emitter.domain.models.report import EmitReport
    from clip_emitter.infrastructure.clipboard.system_clipboard import ClipboardBackend

console = Console()


# ---------------------------------------------------------------------------
# Success / error panels
# ---------------------------------------------------------------------------


def success_panel(message: str, title: str = "clip-emitter") -> None:
    """Print a green success panel."""
    console.print(Panel(message, title=title, border_style="green"))


def error_message(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]❌ {escape(message)}[/]")


# ---------------------------------------------------------------------------
# Run progress
# ---------------------------------------------------------------------------


def run_header(count: int, delay: float, backend: str) -> None:
    console.print(
        f"Testing event listener - will copy {count} items with {delay:g} second delay "
        f"[dim](backend: {escape(backend)})[/]"
    )


def copying_line(index: int) -> None:
    console.print(f"Copying test item {index}")


def failure_line(index: int, error: str) -> None:
    console.print(f"[yellow]⚠️  Item {index} not copied: {escape(error)}[/]")


def done_line() -> None:
    console.print("[bold green]Done[/]")


def interrupted_line(attempted: int, requested: int) -> None:
    console.print(f"[bold yellow]Interrupted after {attempted} of {requested} items[/]")


def summary_table(report: EmitReport) -> None:
    """Print the end-of-run summary."""
    table = Table(title="📋 Run summary", show_header=True, border_style="blue")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Requested", str(report.requested))
    table.add_row("Attempted", str(report.attempted))
    table.add_row("Succeeded", str(report.succeeded))
    failed_style = "red" if report.failed else "green"
    table.add_row("Failed", f"[{failed_style}]{report.failed}[/]")
    table.add_row("Duration", f"{report.duration:.1f}s")

    for content_type, count in sorted(report.content_types.items(), key=lambda kv: kv[0].value):
        table.add_row(f"{content_type.icon} {content_type.value}", str(count))

    console.print(table)


# ---------------------------------------------------------------------------
# Backends / config rendering
# ---------------------------------------------------------------------------


def backends_table(rows: list[tuple[ClipboardBackend, bool, bool]]) -> None:
    """Print known backends as (backend, on_this_platform, available) rows."""
    table = Table(title="📋 Clipboard backends", show_header=True, border_style="blue")
    table.add_column("Name", style="cyan")
    table.add_column("Command")
    table.add_column("Platform", justify="center")
    table.add_column("Available", justify="center")

    for backend, on_platform, available in rows:
        table.add_row(
            backend.name,
            escape(" ".join(backend.command)),
            "✅" if on_platform else "—",
            "✅" if available else "❌",
        )
    console.print(table)


def json_panel(raw_json: str, title: str = "⚙️  Active configuration") -> None:
    """Render JSON inside a syntax-highlighted panel."""
    console.print(
        Panel(
            Syntax(raw_json, "json", theme="monokai", line_numbers=True),
            title=title,
            border_style="blue",
        )
    )
