"""
Graph Command - Build the import graph and report on it.
"""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..utils import echo_success, resolve_config, run_scan

console = Console()


@click.command()
@click.argument("entries", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write the graph as JSON to this file")
@click.option("--show", "pattern", help="Dump nodes whose path contains this substring")
@click.option("--track-externals/--no-track-externals", default=None,
              help="Record files inside node_modules as graph nodes")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="Path to importchain.toml or pyproject.toml")
def graph(entries: tuple, output: str | None, pattern: str | None, track_externals: bool | None,
          config_file: str | None) -> None:
    """
    Build the import graph of ENTRIES and print its statistics.
    """
    config = resolve_config(config_file, track_externals=track_externals)
    plugin, result = run_scan(entries, config)
    import_graph = plugin.graph

    table = Table(title="Import Graph")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for key, value in import_graph.get_stats().items():
        table.add_row(key.replace("_", " "), str(value))
    table.add_row("build errors", str(len(result.errors)))
    console.print(table)

    if pattern:
        for line in import_graph.describe(pattern):
            click.echo(line)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(import_graph.to_dict(), indent=2))
        echo_success(f"Graph written to {output_path}")
