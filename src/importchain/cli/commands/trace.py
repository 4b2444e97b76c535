"""
Trace Command - Explain why a file is part of a build.
"""

import click

from ..utils import echo_info, echo_warning, resolve_config, run_scan


@click.command()
@click.argument("entries", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("-t", "--target", required=True, help="File to trace (absolute, relative or partial path)")
@click.option("--limit", type=int, default=None, help="Maximum chains to show (-1 for all)")
@click.option("--track-externals/--no-track-externals", default=None,
              help="Record files inside node_modules as graph nodes")
@click.option("--strict/--no-strict", "strict_lookup", default=None,
              help="Only match the target by its canonical path")
@click.option("--color/--no-color", default=None, help="Style the chains for a terminal")
@click.option("--json", "as_json", is_flag=True, help="Output the ImportChain as JSON")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="Path to importchain.toml or pyproject.toml")
def trace(
    entries: tuple,
    target: str,
    limit: int | None,
    track_externals: bool | None,
    strict_lookup: bool | None,
    color: bool | None,
    as_json: bool,
    config_file: str | None,
) -> None:
    """
    Trace every import chain from ENTRIES to a target file.
    """
    config = resolve_config(
        config_file,
        limit=limit,
        track_externals=track_externals,
        strict_lookup=strict_lookup,
        color=color,
    )
    plugin, result = run_scan(entries, config)
    chain = plugin.get_import_chains(target)

    if as_json:
        click.echo(chain.model_dump_json(indent=2))
        return

    for line in plugin.format_import_chains([chain]):
        click.echo(line)

    if chain.found and len(chain.chains) > 1:
        click.echo()
        echo_info(f"{len(chain.chains)} chain(s) lead to {chain.resolved}")
    if result.errors:
        echo_warning(f"Build reported {len(result.errors)} error(s), the graph may be incomplete")
