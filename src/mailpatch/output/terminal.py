"""Rich terminal reporter — status pills and a per-message table."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mailpatch.convert.models import ConversionRecord, ConversionReport

_STATUS_STYLE = {
    True: "bold white on green",
    False: "bold black on yellow",
}

_STATUS_ICON = {
    True: "✅",
    False: "⚠️",
}


def _status_pill(record: ConversionRecord) -> Text:
    label = "PATCH" if record.success else "WARNING"
    return Text(f" {_STATUS_ICON[record.success]} {label} ", style=_STATUS_STYLE[record.success])


def render(report: ConversionReport, *, show_summary: bool = True) -> None:
    """Print conversion results to the terminal using Rich."""
    console = Console(stderr=True)

    if not report.records:
        console.print()
        console.print("[dim]No mail messages to convert.[/dim]")
        return

    console.print()
    table = Table(
        title="mailpatch",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Status", justify="center", width=13)
    table.add_column("Patch", style="cyan", min_width=20)
    table.add_column("Source", style="magenta")
    table.add_column("Lines", justify="right", style="green")
    table.add_column("Written", justify="center")
    table.add_column("Notes", min_width=15)

    for record in report.records:
        table.add_row(
            _status_pill(record),
            record.file_name,
            record.source,
            str(record.line_count),
            record.status,
            record.notes or "-",
        )

    console.print(table)

    if show_summary:
        _print_summary(console, report)

    console.print()
    if report.blocked:
        console.print(
            "[bold red]❌ FAILED — some messages could not be recognised as patches.[/bold red]"
        )
    elif report.warnings:
        console.print(
            "[bold yellow]⚠️  Some patches are unreliable; review the *.warning.patch files.[/bold yellow]"
        )
    else:
        console.print("[bold green]✅ All messages rebuilt as patches.[/bold green]")


def _print_summary(console: Console, report: ConversionReport) -> None:
    console.print()
    console.print(f"[dim]Messages:[/dim]      {report.total}")
    console.print(f"[dim]Patches:[/dim]       {len(report.succeeded)}")
    console.print(f"[dim]Warnings:[/dim]      {len(report.warnings)}")
    console.print(f"[dim]Written:[/dim]       {len(report.written)}")
    console.print(f"[dim]Output dir:[/dim]    {report.output_dir}")
    console.print(f"[dim]Duration:[/dim]      {report.duration_ms:.0f}ms")
