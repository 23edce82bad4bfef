"""
Info command - display DRO capture information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.log import setup_logging
from cli.display.tables import display_dro_info, display_events
from droconv.analysis.dro_analyzer import DROAnalyzer
from droconv.models.options import RATE_KEEN
from droconv.utils.errors import FormatError

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="DOSBox capture to analyze (.dro)"),
    rate: int = typer.Option(RATE_KEEN, "--rate", "-r", help="IMF rate used for tick totals"),
    events: int = typer.Option(0, "--events", "-e", help="Show the first N register writes"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """
    Display DRO capture information.

    Shows header fields, decoded length, register write counts
    and whether the capture uses a second OPL chip.

    Examples:

        droconv info song.dro             # Basic info
        droconv info song.dro -e 20       # With the first 20 writes
        droconv info song.dro --json      # JSON output
    """
    setup_logging(quiet=json_output)

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    analyzer = DROAnalyzer(rate=rate)
    try:
        analysis = analyzer.analyze_file(file)
    except (FormatError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        _output_json(analysis)
        return

    display_dro_info(analysis)
    if events > 0:
        display_events(analyzer.dro, limit=events)


def _output_json(analysis) -> None:
    """Output analysis as JSON."""
    from dataclasses import asdict

    data = asdict(analysis)
    data["codemap"] = analysis.codemap.hex()
    data["top_registers"] = [
        {"register": f"0x{register:02X}", "writes": count}
        for register, count in analysis.top_registers
    ]
    console.print_json(data=data)


if __name__ == "__main__":
    app()
