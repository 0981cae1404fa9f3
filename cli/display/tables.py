"""
Rich table displays for song information.
"""

from typing import Iterable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import (
    flag_str,
    format_duration,
    format_pitch,
    format_tempo,
    instrument_name,
    key_name,
    pan_bar,
    value_bar,
)
from nbsreader.analysis.summary import GridSummary
from nbsreader.models.header import NBSHeader
from nbsreader.models.song import Tick


console = Console()


def display_header(header: NBSHeader, filename: str = "") -> None:
    """Display header fields with Rich formatting."""

    legacy = " [yellow](legacy layout?)[/yellow]" if header.is_legacy_format else ""

    song_content = f"""[bold]File:[/bold] {escape(filename) or "N/A"}
[bold]Name:[/bold] {escape(header.song_name)}
[bold]Author:[/bold] {escape(header.song_author)}
[bold]Original Author:[/bold] {escape(header.original_song_author)}
[bold]Description:[/bold] {escape(header.song_description) or "[dim]none[/dim]"}
[bold]Format Version:[/bold] {header.version}{legacy}
[bold]Imported From:[/bold] {escape(header.import_file_name) or "[dim]none[/dim]"}"""

    console.print(
        Panel(
            song_content,
            title="[bold blue]NBS Song Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    timing_table = Table(title="Timing", box=box.SIMPLE, show_header=False)
    timing_table.add_column("Property", style="cyan", width=20)
    timing_table.add_column("Value", width=30)

    timing_table.add_row("Tempo", format_tempo(header.song_tempo))
    timing_table.add_row("Length", f"{header.song_length} ticks")
    timing_table.add_row("Duration", format_duration(header.duration_seconds))
    timing_table.add_row("Time Signature", f"{header.time_signature}/4")
    timing_table.add_row("Layers", str(header.layer_count))
    timing_table.add_row("Instruments", str(header.instrument_count))
    timing_table.add_row("Loop", flag_str(header.loop))
    if header.loop_enabled:
        loops = "forever" if header.max_loop_count == 0 else str(header.max_loop_count)
        timing_table.add_row("Loop Count", loops)
        timing_table.add_row("Loop Start", f"tick {header.loop_start_tick}")

    console.print(timing_table)

    stats_table = Table(title="Editing Statistics", box=box.SIMPLE, show_header=False)
    stats_table.add_column("Property", style="cyan", width=20)
    stats_table.add_column("Value", width=30)

    stats_table.add_row("Minutes Spent", str(header.minutes_spent))
    stats_table.add_row("Left Clicks", str(header.left_clicks))
    stats_table.add_row("Right Clicks", str(header.right_clicks))
    stats_table.add_row("Blocks Added", str(header.note_blocks_added))
    stats_table.add_row("Blocks Removed", str(header.note_blocks_removed))
    stats_table.add_row(
        "Auto-save",
        f"{flag_str(header.auto_save)} every {header.auto_save_duration} min",
    )

    console.print(stats_table)


def display_grid_summary(summary: GridSummary) -> None:
    """Display note grid statistics."""

    if summary.tick_count == 0:
        console.print("[dim]No note blocks in song[/dim]")
        return

    grid_table = Table(title="Note Grid", box=box.ROUNDED, show_header=False)
    grid_table.add_column("Property", style="cyan", width=20)
    grid_table.add_column("Value", width=40)

    grid_table.add_row("Ticks With Notes", str(summary.tick_count))
    grid_table.add_row("Note Blocks", str(summary.note_count))
    grid_table.add_row("Range", f"tick {summary.first_tick} - {summary.last_tick}")
    grid_table.add_row("Layers Used", str(len(summary.layers)))
    grid_table.add_row("Max Polyphony", str(summary.max_polyphony))

    console.print(grid_table)

    inst_table = Table(
        title="Instruments", box=box.ROUNDED, show_header=True, header_style="bold green"
    )
    inst_table.add_column("#", style="dim", width=4)
    inst_table.add_column("Instrument", style="cyan", width=16)
    inst_table.add_column("Notes", width=8)

    for instrument, count in sorted(summary.instruments.items()):
        inst_table.add_row(str(instrument), instrument_name(instrument), str(count))

    console.print(inst_table)


def display_ticks(ticks: Iterable[Tick]) -> int:
    """
    Display note blocks tick by tick.

    Returns:
        Number of ticks shown
    """
    tick_table = Table(
        title="Note Blocks", box=box.ROUNDED, show_header=True, header_style="bold magenta"
    )
    tick_table.add_column("Tick", style="cyan", width=6)
    tick_table.add_column("Layer", width=5)
    tick_table.add_column("#", style="dim", width=6)
    tick_table.add_column("Instrument", width=14)
    tick_table.add_column("Key", width=5)
    tick_table.add_column("Velocity", width=16)
    tick_table.add_column("Pan", width=18)
    tick_table.add_column("Pitch", width=6)

    shown = 0
    for tick in ticks:
        shown += 1
        for i, block in enumerate(tick.layers):
            tick_table.add_row(
                str(tick.tick) if i == 0 else "",
                str(block.layer),
                str(block.noteblock_id),
                instrument_name(block.instrument),
                key_name(block.key),
                value_bar(block.velocity),
                pan_bar(block.panning),
                format_pitch(block.pitch),
            )

    console.print(tick_table)
    return shown
