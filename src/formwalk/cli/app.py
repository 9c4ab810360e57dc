"""
formwalk CLI - prompt for data described by a YAML schema.

Usage:
    formwalk run schema.yaml
    formwalk run schema.yaml --format yaml --output answers.yaml
    formwalk check schema.yaml
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from formwalk.config import OUTPUT_FORMATS, FormwalkConfig, load_config
from formwalk.engine import traverse
from formwalk.exceptions import ConfigError, InputChannelError, SchemaError
from formwalk.loader import load_schema_file
from formwalk.output import dump_result

from .terminal import TerminalPrompter
from .ui import render_schema_tree

console = Console()

app = typer.Typer(
    name="formwalk",
    help="Collect structured answers from an operator, driven by a YAML schema",
    add_completion=False,
    no_args_is_help=True,
)


def _configure_logging(level: str) -> None:
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Load configuration shared by every command."""
    try:
        config = load_config()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


@app.command()
def run(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., help="Path to the YAML schema", dir_okay=False),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide field titles and descriptions"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the answers to this file"),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format ({', '.join(OUTPUT_FORMATS)})",
    ),
) -> None:
    """Prompt for every field of a schema and print the answers."""
    config: FormwalkConfig = ctx.obj or FormwalkConfig()
    fmt = (output_format or config.output_format).lower()
    if fmt not in OUTPUT_FORMATS:
        console.print(f"[red]Error:[/red] Unsupported output format {fmt!r}")
        raise typer.Exit(1)

    try:
        schema = load_schema_file(schema_path)
    except SchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        result = traverse(schema, TerminalPrompter(console), quiet=quiet or config.quiet)
    except InputChannelError as e:
        console.print(f"\n[yellow]Aborted:[/yellow] {e.reason}")
        raise typer.Exit(1)

    if output is None:
        typer.echo()
        dump_result(result, fmt, sys.stdout)
        return

    with output.open("w", encoding="utf-8") as handle:
        dump_result(result, fmt, handle)
    console.print(f"[green]Answers written to[/green] {output}")


@app.command()
def check(
    schema_path: Path = typer.Argument(..., help="Path to the YAML schema", dir_okay=False),
) -> None:
    """Validate a schema and show its fields."""
    try:
        schema = load_schema_file(schema_path)
    except SchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(render_schema_tree(schema, str(schema_path)))
    console.print("\n[bold green]Schema is valid.[/bold green]")


def main():
    app()


if __name__ == "__main__":
    main()
