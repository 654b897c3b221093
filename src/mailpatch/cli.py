"""mailpatch CLI — Typer application with convert, check, name, and init commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from mailpatch import __version__

app = typer.Typer(
    name="mailpatch",
    help="Rebuild git patches from mail bodies mangled by mail clients.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


# ── convert ───────────────────────────────────────────────────────────────────


@app.command()
def convert(
    inputs: List[Path] = typer.Argument(..., help=".eml files, mbox files or directories of .eml files"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .mailpatch.toml"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Directory for rebuilt patches"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Report format: terminal | json | yaml"),
    report: Optional[str] = typer.Option(None, "--report", help="Write report to file"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace existing patch files"),
    skip_failed: bool = typer.Option(False, "--skip-failed", help="Do not write patches that failed recognition"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any message fails recognition"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be written without writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Convert mail messages into patch files."""
    from mailpatch.config.loader import ConfigError, load_config
    from mailpatch.config.schema import OUTPUT_FORMATS
    from mailpatch.convert.engine import ConvertError, convert_messages
    from mailpatch.mail.reader import MailError, load_messages
    from mailpatch.output import json_report, terminal, yaml_report

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if output_dir:
        cfg.output.directory = output_dir
    if overwrite:
        cfg.output.overwrite = True
    if skip_failed:
        cfg.convert.keep_failed = False
    if strict:
        cfg.convert.fail_on_warning = True

    # --- Read mail ---
    try:
        messages = load_messages(inputs)
    except MailError as exc:
        console.print(f"[bold red]Mail error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose or debug:
        console.print(f"[dim]Messages loaded: {len(messages)}[/dim]")
        console.print(f"[dim]Output dir: {cfg.output.directory}[/dim]")

    # --- Convert ---
    try:
        result = convert_messages(messages, cfg, dry_run=dry_run)
    except ConvertError as exc:
        console.print(f"[bold red]Write error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if debug:
        for record in result.records:
            console.print(f"[dim]{record.source}: final state {record.final_state.value}[/dim]")
        console.print(f"[dim]Conversion duration: {result.duration_ms:.0f}ms[/dim]")

    if dry_run:
        console.print(f"[bold]Dry run — {result.total} patches would be written:[/bold]")
        for record in result.records:
            console.print(f"  {record.file_name}")
        raise typer.Exit(code=0)

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(result, show_summary=cfg.output.show_summary)
    elif cfg.output.format == "json":
        report_text = json_report.render(result)
        print(report_text)
    elif cfg.output.format == "yaml":
        report_text = yaml_report.render(result)
        print(report_text, end="")

    if report:
        if report_text is None:
            # Terminal output requested on screen; file report falls back to JSON
            report_text = json_report.render(result)
        Path(report).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {report}[/dim]")

    if result.blocked:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    source: str = typer.Argument("-", help="File holding a raw mail body, or - for stdin"),
    emit: bool = typer.Option(False, "--emit", help="Write the rebuilt patch to stdout"),
) -> None:
    """Check whether a raw mail body is a patch."""
    from mailpatch.patch.recognizer import recognize

    if source == "-":
        body = sys.stdin.read()
    else:
        try:
            body = Path(source).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    result = recognize(body)

    if emit:
        sys.stdout.write(result.text)
        sys.stdout.flush()

    if result.success:
        console.print("[green]✓[/green] Body is a well-formed patch.")
        raise typer.Exit(code=0)

    console.print(f"[red]✗[/red] Body is not a reliable patch (ended in {result.final_state.value}).")
    for failure in result.failures:
        where = f"line {failure.line_no}" if failure.line_no else "end of input"
        console.print(f"  [yellow]{failure.reason.value}[/yellow] at {where}: {failure.detail}")
    raise typer.Exit(code=1)


# ── name ──────────────────────────────────────────────────────────────────────


@app.command()
def name(
    subject: str = typer.Argument(..., help="Mail subject line"),
    warning: bool = typer.Option(False, "--warning", help="Name an unreliable patch"),
) -> None:
    """Print the patch file name derived from a mail subject."""
    from mailpatch.patch.filename import derive_patch_filename

    print(derive_patch_filename(subject, not warning))


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Generate a starter .mailpatch.toml in the current directory."""
    from mailpatch.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"mailpatch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """mailpatch — Rebuild git patches from mail bodies mangled by mail clients."""
