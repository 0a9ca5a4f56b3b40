"""Link Cleaner CLI — entry-point for all user-facing operations.

Usage:
    python cli/main.py --help

Commands:
    clean      → clean text from an argument, a file, or stdin
    clipboard  → clean the system clipboard once or keep watching it
    serve      → run the HTTP API
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkclean.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from linkclean.cleaner import clean_text_with_report
from linkclean.config import settings
from cli.commands.clipboard import clipboard_app
from cli.rendering import render_report, render_report_json

app = typer.Typer(
    name="linkclean",
    help="Strip tracking parameters from links in text.",
    no_args_is_help=True,
)
app.add_typer(clipboard_app, name="clipboard")


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Text cleaning
# ---------------------------------------------------------------------------
@app.command("clean")
def clean(
    text: Optional[str] = typer.Argument(None, help="Text to clean. Reads stdin when omitted."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read the text from a file."),
    report: bool = typer.Option(False, "--report", help="Print a change summary to stderr."),
    as_json: bool = typer.Option(False, "--json", help="Print the full report as JSON."),
) -> None:
    """Print the input text with every link cleaned."""
    if file is not None:
        if not file.is_file():
            typer.echo(f"❌ File not found: {file}", err=True)
            raise typer.Exit(code=1)
        source = file.read_text(encoding="utf-8")
    elif text is not None:
        source = text
    else:
        source = sys.stdin.read()

    result = clean_text_with_report(source)

    if as_json:
        typer.echo(render_report_json(result))
        return

    # Argument text gets a newline; file/stdin content is echoed as-is.
    typer.echo(result.output, nl=text is not None and file is None)
    if report:
        typer.echo(render_report(result), err=True)


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to settings)."),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to settings)."),
) -> None:
    """Run the HTTP API under uvicorn."""
    import uvicorn  # noqa: PLC0415

    bind_host = host or settings.api_host
    bind_port = port or settings.api_port
    typer.echo(f"[serve] Listening on http://{bind_host}:{bind_port}")
    uvicorn.run("linkclean.api.app:app", host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
