"""
Ticks command - stream note blocks tick by tick.
"""

from dataclasses import asdict
from itertools import islice
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

import nbsreader
from cli.display.tables import display_ticks
from nbsreader.config import DecoderConfig

console = Console()


def ticks(
    file: Path = typer.Argument(..., help="Song file to read (.nbs)"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Stop after this many ticks"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    strict_text: bool = typer.Option(
        False, "--strict-text", help="Fail on malformed text instead of substituting"
    ),
) -> None:
    """
    List note blocks in song order.

    The file is streamed, so only the ticks that are shown get decoded.

    Examples:

        nbsreader ticks song.nbs             # Every tick
        nbsreader ticks song.nbs -n 16       # First 16 ticks
        nbsreader ticks song.nbs --json      # JSON output
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    config = DecoderConfig(text_errors="strict" if strict_text else "replace")

    try:
        with nbsreader.read(file, config) as song:
            stream = islice(song.ticks, limit) if limit else song.ticks

            if json_output:
                rows = [
                    {"tick": tick.tick, "layers": [asdict(block) for block in tick.layers]}
                    for tick in stream
                ]
                console.print_json(data=rows)
            else:
                shown = display_ticks(stream)
                console.print(f"[dim]{shown} ticks shown[/dim]")
    except nbsreader.NBSError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
