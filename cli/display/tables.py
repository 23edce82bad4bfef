"""
Rich table displays for DRO file information.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from droconv.analysis.dro_analyzer import DROAnalysis
from droconv.models.dro import DROFile


console = Console()


def format_duration(ms: int) -> str:
    """Format milliseconds as m:ss.mmm."""
    minutes, ms = divmod(ms, 60000)
    seconds, ms = divmod(ms, 1000)
    return f"{minutes}:{seconds:02d}.{ms:03d}"


def display_dro_info(analysis: DROAnalysis) -> None:
    """Display DRO file information with Rich formatting."""

    chips = "[yellow]Multiple[/yellow]" if analysis.multiple_chips else "[green]Single[/green]"

    header_content = f"""[bold]File:[/bold] {analysis.filepath}
[bold]Format:[/bold] DRO {analysis.version}
[bold]File Size:[/bold] {analysis.filesize} bytes
[bold]Data Length:[/bold] {analysis.data_length} bytes
[bold]Hardware Type:[/bold] {analysis.hardware_type} ({analysis.hardware_type_width}-byte field)
[bold]OPL Chips:[/bold] {chips}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]DRO Capture Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    timing_table = Table(box=box.SIMPLE, show_header=False)
    timing_table.add_column("Property", style="cyan", width=20)
    timing_table.add_column("Value", width=40)

    timing_table.add_row("Header Length", format_duration(analysis.length_ms))
    timing_table.add_row("Decoded Length", format_duration(analysis.total_delay_ms))
    timing_table.add_row("Register Writes", str(analysis.event_count))
    timing_table.add_row("IMF Ticks", f"{analysis.imf_ticks} @ {analysis.rate} Hz")

    if analysis.short_delay_code is not None:
        timing_table.add_row("Short Delay Code", f"0x{analysis.short_delay_code:02X}")
        timing_table.add_row("Long Delay Code", f"0x{analysis.long_delay_code:02X}")
        timing_table.add_row("Codemap Entries", str(len(analysis.codemap)))

    console.print(timing_table)

    if analysis.top_registers:
        reg_table = Table(
            title="Most Written Registers",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold magenta",
        )
        reg_table.add_column("Register", style="cyan", width=10)
        reg_table.add_column("Writes", justify="right", width=8)

        for register, count in analysis.top_registers:
            reg_table.add_row(f"0x{register:02X}", str(count))

        console.print(reg_table)


def display_events(dro: DROFile, limit: int = 32) -> None:
    """Display the first register writes of a DRO file."""
    event_table = Table(box=box.SIMPLE, show_header=True, header_style="dim")
    event_table.add_column("#", style="dim", width=6)
    event_table.add_column("Delay (ms)", justify="right", width=10)
    event_table.add_column("Reg", style="cyan", width=5)
    event_table.add_column("Data", width=5)

    for i, event in enumerate(dro.events[:limit]):
        event_table.add_row(str(i), str(event.delay), f"{event.register:02X}", f"{event.data:02X}")

    console.print(event_table)

    if len(dro.events) > limit:
        console.print(f"[dim]... {len(dro.events) - limit} more events[/dim]")
