"""
nbsreader - Decoder for Note Block Studio song files.

A CLI tool for inspecting .nbs files.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from nbsreader import __version__
from cli.commands.info import info
from cli.commands.ticks import ticks

console = Console()

# Main app
app = typer.Typer(
    name="nbsreader",
    help="Inspect Note Block Studio (.nbs) song files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="ticks")(ticks)


def setup_logging(verbose: bool) -> None:
    """Route library log records through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]nbsreader[/bold] version {__version__}")
    console.print("[dim]Decoder for Note Block Studio song files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    nbsreader - Inspect Note Block Studio songs.

    [bold]Commands:[/bold]

        nbsreader info song.nbs          # Header and grid summary
        nbsreader ticks song.nbs         # Note blocks, tick by tick
        nbsreader ticks song.nbs -n 8    # First 8 ticks only

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
