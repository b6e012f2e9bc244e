"""Thin CLI wrapper — Typer commands that delegate to Use Cases.

All emitter logic is accessed through the Container (bootstrap.py).
"""

from __future__ import annotations

import shutil
import signal
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from clip_emitter.presentation.cli.formatters import (
    backends_table,
    console,
    error_message,
    json_panel,
    success_panel,
)

# Conventional exit status for a run stopped by SIGINT
EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="clip-emitter",
    help="📋 Emit timed clipboard events to exercise clipboard listeners",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Sub-app for config commands
config_app = typer.Typer(
    name="config",
    help="⚙️  Manage clip-emitter configuration",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# clip-emitter run
# ---------------------------------------------------------------------------


@app.command()
def run(
    count: Annotated[
        Optional[int],
        typer.Option("--count", "-n", envvar="CLIP_EMITTER_COUNT", help="Number of events"),
    ] = None,
    delay: Annotated[
        Optional[float],
        typer.Option(
            "--delay", "-d", envvar="CLIP_EMITTER_DELAY", help="Seconds between events"
        ),
    ] = None,
    label: Annotated[
        Optional[str],
        typer.Option("--label", "-l", envvar="CLIP_EMITTER_LABEL", help="Payload label"),
    ] = None,
    backend: Annotated[
        Optional[str],
        typer.Option(
            "--backend",
            "-b",
            envvar="CLIP_EMITTER_BACKEND",
            help="Clipboard backend (wl-copy, xclip, xsel, pbcopy, clip, memory)",
        ),
    ] = None,
    skip_final_delay: Annotated[
        Optional[bool],
        typer.Option(
            "--skip-final-delay/--keep-final-delay",
            help="Do not wait after the last event",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Use an in-memory clipboard instead of the system one"),
    ] = False,
    summary: Annotated[
        bool,
        typer.Option("--summary/--no-summary", help="Print the run summary table"),
    ] = True,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    config: Annotated[
        Optional[str],
        typer.Option("--config", "-c", help="Path to a JSON config file"),
    ] = None,
) -> None:
    """Copy COUNT generated items to the clipboard, DELAY seconds apart."""
    from clip_emitter.bootstrap import Container
    from clip_emitter.config import resolve_config
    from clip_emitter.domain.errors import ClipboardBackendNotFoundError, ConfigurationError
    from clip_emitter.logging_config import setup_logging
    from clip_emitter.presentation.cli.progress import ConsoleProgress

    setup_logging(verbose)

    try:
        cfg = resolve_config(
            Path(config) if config else None,
            count=count,
            delay=delay,
            label=label,
            backend=backend,
            skip_final_delay=skip_final_delay,
        )
    except ConfigurationError as e:
        error_message(str(e))
        raise typer.Exit(code=1)

    container = Container(cfg, progress=ConsoleProgress(show_summary=summary), dry_run=dry_run)
    try:
        uc = container.emit_events()
    except ClipboardBackendNotFoundError as e:
        error_message(str(e))
        raise typer.Exit(code=1)

    previous = _install_signal_handlers(container.stop_event.set)
    try:
        report = uc.execute(cfg)
    finally:
        _restore_signal_handlers(previous)

    if report.cancelled:
        raise typer.Exit(code=EXIT_INTERRUPTED)


def _install_signal_handlers(stop) -> dict:
    """Route SIGINT / SIGTERM to *stop* and return the previous handlers."""

    def _handler(signum, frame):
        stop()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[sig] = signal.signal(sig, _handler)
        except ValueError:
            # Not in the main thread; keep default behaviour
            continue
    return previous


def _restore_signal_handlers(previous: dict) -> None:
    for sig, handler in previous.items():
        if handler is not None:
            signal.signal(sig, handler)


# ---------------------------------------------------------------------------
# clip-emitter backends
# ---------------------------------------------------------------------------


@app.command()
def backends() -> None:
    """List known clipboard backends and whether they are usable here."""
    from clip_emitter.infrastructure.clipboard.system_clipboard import (
        KNOWN_BACKENDS,
        is_available,
    )

    rows = []
    for backend in KNOWN_BACKENDS:
        on_platform = any(sys.platform.startswith(p) for p in backend.platforms)
        rows.append((backend, on_platform, on_platform and is_available(backend)))
    backends_table(rows)


# ---------------------------------------------------------------------------
# clip-emitter config show / init / validate / path
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(
    config: Annotated[
        Optional[str],
        typer.Option("--config", "-c", help="Path to a JSON config file"),
    ] = None,
) -> None:
    """Show the active configuration."""
    from clip_emitter.config import get_config, load_config
    from clip_emitter.domain.errors import ConfigurationError

    try:
        cfg = load_config(Path(config)) if config else get_config()
    except ConfigurationError as e:
        error_message(str(e))
        raise typer.Exit(code=1)
    json_panel(cfg.model_dump_json(indent=2))


@config_app.command("init")
def config_init(
    output: Annotated[
        Optional[str],
        typer.Option("--output", "-o", help="Destination file (default: user config file)"),
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite without asking")] = False,
) -> None:
    """Write the default configuration to a file for editing."""
    from clip_emitter.config.loader import _DEFAULT_CONFIG_PATH, user_config_path

    dest = Path(output) if output else user_config_path()
    if dest.exists() and not force:
        console.print(f"[bold yellow]⚠️  File already exists:[/] {dest}")
        overwrite = typer.confirm("Overwrite it?")
        if not overwrite:
            raise typer.Abort()

    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(_DEFAULT_CONFIG_PATH, dest)
    success_panel(
        f"✅ Configuration written to: [bold green]{dest}[/]\n\n"
        "Edit it and pass it with [bold]--config[/]:\n"
        f'  clip-emitter run --config "{dest}"',
        title="⚙️  Config Init",
    )


@config_app.command("validate")
def config_validate(
    config_file: Annotated[str, typer.Argument(help="JSON config file to validate")],
) -> None:
    """Validate a JSON configuration file."""
    from clip_emitter.config import load_config
    from clip_emitter.domain.errors import ConfigurationError

    path = Path(config_file)
    if not path.exists():
        error_message(f"File not found: {path}")
        raise typer.Exit(code=1)

    try:
        cfg = load_config(path)
    except ConfigurationError as e:
        console.print("[bold red]❌ Validation error:[/]\n")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1)

    success_panel(
        f"✅ Configuration is valid\n\n"
        f"  Count: [cyan]{cfg.count}[/]\n"
        f"  Delay: [cyan]{cfg.delay:g}s[/]\n"
        f"  Backend: [cyan]{cfg.backend or 'auto'}[/]",
        title="✅ Validation",
    )


@config_app.command("path")
def config_path() -> None:
    """Print the location of the user config file."""
    from clip_emitter.config.loader import user_config_path

    console.print(str(user_config_path()), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
