"""
importchain CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import graph, inspect, trace
from .utils import configure_logging


@click.group()
@click.version_option(package_name="importchain")
@click.option("-v", "--verbose", is_flag=True, help="Log resolution details")
def main(verbose: bool):
    """importchain: Explain why a file is part of your bundle.

    Builds the import graph of a JavaScript/TypeScript project from its
    entry points and traces every chain leading to a file.

    \b
    Quick Start:
      importchain trace src/index.ts --target src/server/db.ts
      importchain inspect src/index.ts
      importchain graph src/index.ts --output graph.json
    """
    configure_logging(verbose)


main.add_command(trace.trace)
main.add_command(inspect.inspect)
main.add_command(graph.graph)

if __name__ == "__main__":
    main()
