"""Clipboard commands: clean the clipboard once or keep watching it."""

from __future__ import annotations

from typing import Optional

import pyperclip
import typer

from linkclean.models import CleanReport
from linkclean.watcher import ClipboardWatcher

clipboard_app = typer.Typer(help="Clean links in the system clipboard.")


def _announce(report: CleanReport) -> None:
    typer.echo(f"✅ Clipboard cleaned: {report.summary()}")


@clipboard_app.command("once")
def clipboard_once() -> None:
    """Clean the current clipboard contents once."""
    watcher = ClipboardWatcher()
    try:
        report = watcher.poll_once()
    except pyperclip.PyperclipException as e:
        typer.echo(f"❌ Clipboard unavailable: {e}")
        raise typer.Exit(code=1)

    if report is None:
        typer.echo("Clipboard already clean.")
        return
    _announce(report)


@clipboard_app.command("watch")
def clipboard_watch(
    interval: Optional[float] = typer.Option(
        None, "--interval", help="Seconds between clipboard polls (defaults to settings)."
    ),
) -> None:
    """Watch the clipboard and clean links whenever its text changes."""
    watcher = ClipboardWatcher(interval=interval, on_clean=_announce)
    typer.echo(f"👀 Watching clipboard every {watcher.interval}s (Ctrl+C to stop) …")
    try:
        watcher.run()
    except KeyboardInterrupt:
        typer.echo("Stopped.")
