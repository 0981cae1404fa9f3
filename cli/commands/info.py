"""
Info command - display song header and note grid summary.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

import nbsreader
from cli.display.tables import display_grid_summary, display_header
from nbsreader.analysis.summary import summarize_ticks
from nbsreader.config import DecoderConfig

console = Console()


def info(
    file: Path = typer.Argument(..., help="Song file to analyze (.nbs)"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    strict_text: bool = typer.Option(
        False, "--strict-text", help="Fail on malformed text instead of substituting"
    ),
) -> None:
    """
    Display song file information.

    Shows the header of an NBS file including:

    - Song name, author, description
    - Tempo, length, time signature and loop settings
    - Editing statistics
    - Note grid summary (ticks, note blocks, layers, instruments)

    Examples:

        nbsreader info song.nbs           # Basic info
        nbsreader info song.nbs --json    # JSON output
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    config = DecoderConfig(text_errors="strict" if strict_text else "replace")

    try:
        song = nbsreader.read_all(file, config)
    except nbsreader.NBSError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    summary = summarize_ticks(song.ticks)

    if json_output:
        console.print_json(data={"header": song.header.to_dict(), "grid": summary.to_dict()})
        return

    display_header(song.header, filename=str(file))
    display_grid_summary(summary)
