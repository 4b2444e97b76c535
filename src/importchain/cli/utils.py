"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, configuration loading and the
glue that runs a scan build from synchronous click commands.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

import click

from ..build.scanner import ScanBuild
from ..config import ConfigError, TracerConfig, load_config
from ..plugin.host import BuildResult
from ..plugin.import_graph import ImportGraphPlugin


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """
    Print a dimmed informational message.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(message)s",
        datefmt="[%X]",
    )


def resolve_config(config_file: Optional[str], **overrides) -> TracerConfig:
    """
    Load the configuration file and apply command line overrides.

    Exits with status 1 when the configuration file is invalid.
    """
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigError as e:
        echo_error(f"Invalid configuration: {e}")
        sys.exit(1)
    return config.merged(**overrides)


def run_scan(entries: Sequence[str], config: TracerConfig) -> Tuple[ImportGraphPlugin, BuildResult]:
    """Run a scan build with the import graph plugin attached."""
    plugin = ImportGraphPlugin(config)
    build = ScanBuild.from_config(entries, config, plugins=[plugin])
    result = asyncio.run(build.run())
    return plugin, result
