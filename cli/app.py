"""
droconv - Convert DOSBox DRO captures to id Software IMF music.

A small CLI around the droconv library.
"""

import typer
from rich.console import Console

from cli.commands.info import info
from cli.commands.convert import convert
from droconv import __version__

console = Console()

# Main app
app = typer.Typer(
    name="droconv",
    help="Convert DOSBox .dro captures to id Software .imf music.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="convert")(convert)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]droconv[/bold] version {__version__}")
    console.print("[dim]DOSBox DRO to id Software IMF converter[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    droconv - Convert DOSBox OPL captures to IMF music.

    Reads [cyan]DRO[/cyan] captures (versions 1.0 and 2.0) and writes
    [cyan]IMF[/cyan] type-0 (Commander Keen) or type-1 (Wolfenstein 3-D) files.

    [bold]Commands:[/bold]

        droconv info song.dro                  # Capture details
        droconv convert song.dro               # Type-0 at 560 Hz
        droconv convert song.dro -t 1 -r 700   # Type-1 at 700 Hz

    Use --help with any command for more details.
    """
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
