"""
Inspect Command - Report build errors together with their import chains.
"""

import asyncio
import sys

import click

from ...build.inspector import inspect_build
from ..utils import echo_success, resolve_config


@click.command()
@click.argument("entries", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--limit", type=int, default=-1, help="Maximum messages to show (-1 for all)")
@click.option("--external", "externals", multiple=True, help="Package to leave unresolved (repeatable)")
@click.option("--errors-only", is_flag=True, help="Hide warnings")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="Path to importchain.toml or pyproject.toml")
def inspect(entries: tuple, limit: int, externals: tuple, errors_only: bool, config_file: str | None) -> None:
    """
    Scan the build rooted at ENTRIES and explain every error.

    Exits with status 1 when errors were found.
    """
    config = resolve_config(config_file)
    result = asyncio.run(inspect_build(entries, config, externals=externals))

    if not result.errors:
        echo_success(f"No build errors ({len(result.inputs)} files scanned)")
        return

    report = result.debug(
        limit=limit,
        filter=(lambda e: e.kind == "error") if errors_only else None,
    )
    click.echo(report)

    if result.has_errors:
        sys.exit(1)
