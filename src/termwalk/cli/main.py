"""CLI entry point for termwalk.

Invoked as::

    termwalk [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m termwalk.cli.main

Commands
--------
rewrite     Apply rewrite rules to a JSON or YAML document
stats       Count the nodes of a document by type
rules       List the available rewrite rules
adapters    List the registered term adapters
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    """Read a document, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _load_or_exit(path: str) -> Any:
    """Read and parse a document, printing errors and exiting on failure."""
    from termwalk.rewrite import DocumentError, format_for_path, load_document

    source = _read_source(path)
    logger.debug("Read %d characters from %s", len(source), path)
    try:
        return load_document(source, format_for_path(path))
    except DocumentError as exc:
        err_console.print(f"[red]Cannot parse[/red] {path}: {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="termwalk")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Generic traversal and rewriting of nested data structures."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from termwalk import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]termwalk[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# adapters command
# ---------------------------------------------------------------------------


@cli.command(name="adapters")
def adapters_command() -> None:
    """List term adapters, including those installed through entry-points."""
    from termwalk.terms import default_registry

    default_registry.load_entrypoints()

    table = Table(title="Term adapters")
    table.add_column("Type", style="bold")
    table.add_column("Module")
    table.add_column("Adapter")
    for term_type in default_registry.registered_types():
        table.add_row(
            term_type.__qualname__,
            term_type.__module__,
            type(default_registry.get(term_type)).__name__,
        )
    console.print(table)
    console.print("[dim]Dataclasses and named tuples are handled without registration.[/dim]")


# ---------------------------------------------------------------------------
# rules command
# ---------------------------------------------------------------------------


@cli.command(name="rules")
def rules_command() -> None:
    """List the available rewrite rules."""
    from termwalk.rewrite import available_rules, get_rule

    table = Table(title="Rewrite rules")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for name in available_rules():
        table.add_row(name, get_rule(name).description)
    console.print(table)


# ---------------------------------------------------------------------------
# rewrite command
# ---------------------------------------------------------------------------


@cli.command(name="rewrite")
@click.argument("file", type=click.Path(exists=False))
@click.option("--rule", "-r", "rules", multiple=True, help="Rule to apply (repeatable)")
@click.option(
    "--protect",
    "-p",
    "protect_keys",
    multiple=True,
    help="Leave untouched any mapping containing this key (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="YAML file with rules, protect_keys and output_format",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default=None,
    help="Output format (defaults to the config, else json)",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def rewrite_command(
    file: str,
    rules: tuple[str, ...],
    protect_keys: tuple[str, ...],
    config_path: str | None,
    output_format: str | None,
    output: str | None,
) -> None:
    """Apply rewrite rules to every node of a JSON or YAML document.

    FILE is the path to the document (.json, .yaml or .yml).

    Examples:

    \b
        termwalk rewrite data.json --rule strip-strings --rule drop-nulls
        termwalk rewrite data.yaml -r upper-strings --protect raw --format yaml
        termwalk rewrite data.json --config rewrite.yaml -o out.json
    """
    from termwalk.rewrite import ConfigError, DocumentError, RewriteConfig, dump_document, rewrite

    try:
        base = RewriteConfig.from_file(config_path) if config_path else RewriteConfig()
        config = base.merged(
            rules=rules,
            protect_keys=protect_keys,
            output_format=output_format.lower() if output_format else None,
        )
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    if not config.rules:
        err_console.print(
            "[yellow]Warning:[/yellow] No rules given; the document is only re-serialised."
        )

    document = _load_or_exit(file)
    result = rewrite(document, config)

    try:
        text = dump_document(result, config.output_format)
    except DocumentError as exc:
        err_console.print(f"[red]Output error:[/red] {exc}")
        sys.exit(1)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Rewritten document written to[/green] {output}")
    else:
        # stdout carries the document itself, unwrapped.
        click.echo(text, nl=False)


# ---------------------------------------------------------------------------
# stats command
# ---------------------------------------------------------------------------


@cli.command(name="stats")
@click.argument("file", type=click.Path(exists=False))
def stats_command(file: str) -> None:
    """Count the nodes of a JSON or YAML document by type.

    FILE is the path to the document.
    """
    from termwalk.rewrite import document_stats

    document = _load_or_exit(file)
    counts = document_stats(document)

    table = Table(title=f"Nodes: {file}")
    table.add_column("Type", style="bold")
    table.add_column("Count", justify="right")
    for type_name, count in counts.items():
        table.add_row(type_name, str(count))
    console.print(table)
    console.print(f"\n[bold]{sum(counts.values())}[/bold] node(s) total")


if __name__ == "__main__":
    cli()
