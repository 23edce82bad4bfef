"""
Convert command - DRO capture to IMF music file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cli.display.log import setup_logging
from droconv.converters.dro_to_imf import DROToIMFConverter
from droconv.models.options import RATE_KEEN, ConvertOptions
from droconv.utils.errors import FormatError
from droconv.utils.validation import ValidationError

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source DOSBox capture (.dro)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    rate: int = typer.Option(
        RATE_KEEN, "--rate", "-r", help="IMF tick rate in Hz (560 = Keen, 700 = Wolf3D)"
    ),
    imf_type: int = typer.Option(0, "--type", "-t", help="IMF type: 0 (Keen) or 1 (Wolf3D)"),
    title: str = typer.Option("", "--title", help="Song title (type 1 only)"),
    composer: str = typer.Option("", "--composer", help="Composer name (type 1 only)"),
    remarks: str = typer.Option("", "--remarks", help="Remarks (type 1 only)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Convert a DOSBox .dro capture to an id Software .imf file.

    Delays are re-quantized from milliseconds to the IMF tick rate.
    Writes to a second OPL chip are dropped with a warning.

    Examples:

        droconv convert song.dro

        droconv convert song.dro -o song.wlf --rate 700 --type 1 --title "Song"
    """
    setup_logging(verbose)

    if not source.exists():
        console.print(f"[red]Error: Source file not found: {source}[/red]")
        raise typer.Exit(1)

    output_path = output or source.with_suffix(".imf")

    if imf_type != 1 and (title or composer or remarks):
        console.print("[yellow]Tags are only stored in type 1 files, ignoring them.[/yellow]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Converting DRO to IMF...", total=None)

        try:
            converter = DROToIMFConverter(
                ConvertOptions(
                    rate=rate,
                    flavor=imf_type,
                    title=title,
                    composer=composer,
                    remarks=remarks,
                )
            )
            converter.convert_and_save(source, output_path)

            progress.update(task, description="Done!")

        except (FormatError, ValidationError, OSError) as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(
        f"[dim]Output size: {output_path.stat().st_size} bytes "
        f"({converter.event_count} register writes, type {imf_type}, {rate} Hz)[/dim]"
    )

    if converter.multiple_chips:
        console.print("[yellow]Second OPL chip writes were dropped.[/yellow]")


if __name__ == "__main__":
    app()
