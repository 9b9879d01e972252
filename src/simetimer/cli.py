"""CLI entry point — launch the TUI, inspect and convert project files, show config."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simetimer import __version__
from simetimer.chunks import format_duration
from simetimer.codec import FileFormat, load_project, save_project
from simetimer.config import CONFIG_PATH, file_format, init_config_if_missing, load_config
from simetimer.errors import InvalidArgumentError, ProjectFileError
from simetimer.logging_setup import setup_logging

console = Console(highlight=False)

FORMAT_CHOICE = click.Choice([f.value for f in FileFormat], case_sensitive=False)


def _resolve_format(fmt: str | None) -> FileFormat:
    """Explicit flag wins, otherwise the configured file format."""
    if fmt:
        return FileFormat.coerce(fmt)
    return file_format(load_config())


def _fail(message: str) -> None:
    console.print(f"  [red bold]Error:[/red bold] {message}")
    sys.exit(1)


# ---------------------------------------------------------------------------
# Main command group
# ---------------------------------------------------------------------------

@click.group(invoke_without_command=True)
@click.option(
    "-f", "--file",
    "project_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Project file to open instead of the last used one.",
)
@click.option(
    "--format", "fmt",
    type=FORMAT_CHOICE,
    default=None,
    help="File format of --file (default: from config).",
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(__version__, prog_name="simetimer")
@click.pass_context
def main(ctx: click.Context, project_file: str | None, fmt: str | None, debug: bool) -> None:
    """SimeTimer — stopwatch and time tracking in the terminal."""
    setup_logging(debug=debug)
    if ctx.invoked_subcommand is not None:
        return

    from simetimer.app import SimeTimerApp

    app = SimeTimerApp(
        open_file=Path(project_file).expanduser() if project_file else None,
        open_format=FileFormat.coerce(fmt) if fmt else None,
    )
    app.run()


# ---------------------------------------------------------------------------
# show subcommand
# ---------------------------------------------------------------------------

@main.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--format", "fmt", type=FORMAT_CHOICE, default=None, help="File format (default: from config).")
def show(path: str, fmt: str | None) -> None:
    """Print the chunks of a project file."""
    try:
        project = load_project(path, _resolve_format(fmt))
    except ProjectFileError as exc:
        _fail(exc.message)
        return

    table = Table(title=Path(path).name)
    table.add_column("#", justify="right")
    table.add_column("Start")
    table.add_column("Duration", justify="right")
    table.add_column("Comment")
    for row in project.rows():
        table.add_row(*(escape(cell) for cell in row))
    console.print(table)
    console.print(f"  [bold]Total[/bold]  {format_duration(project.total_time())}  "
                  f"[dim]({project.size()} chunks)[/dim]")


# ---------------------------------------------------------------------------
# convert subcommand
# ---------------------------------------------------------------------------

@main.command()
@click.argument("source", type=click.Path(dir_okay=False))
@click.argument("target", type=click.Path(dir_okay=False))
@click.option("--from", "from_fmt", type=FORMAT_CHOICE, required=True, help="Format of SOURCE.")
@click.option("--to", "to_fmt", type=FORMAT_CHOICE, required=True, help="Format of TARGET.")
@click.option("--legacy", is_flag=True, default=False,
              help="Read SOURCE in the old layout without comments.")
def convert(source: str, target: str, from_fmt: str, to_fmt: str, legacy: bool) -> None:
    """Re-encode a project file in another format."""
    try:
        project = load_project(source, from_fmt, legacy=legacy)
        save_project(project, target, to_fmt)
    except (ProjectFileError, InvalidArgumentError) as exc:
        _fail(getattr(exc, "message", str(exc)))
        return
    console.print(f"  [green]Converted[/green]  {project.size()} chunks  "
                  f"[dim]{source} ({from_fmt}) -> {target} ({to_fmt})[/dim]")


# ---------------------------------------------------------------------------
# config subcommand
# ---------------------------------------------------------------------------

@main.command()
@click.option("--show", is_flag=True, default=False, help="Print current config values.")
def config(show: bool) -> None:
    """Show config file location or values."""
    if init_config_if_missing():
        console.print(f"  Created default config at [dim]{CONFIG_PATH}[/dim]")
    if show:
        for key, val in load_config().items():
            console.print(f"  [bold]{key}:[/bold] {val}")
    else:
        console.print(f"  Config file: [dim]{CONFIG_PATH}[/dim]")
        console.print("  [dim]Run 'simetimer config --show' to print the values.[/dim]")
