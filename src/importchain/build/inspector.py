"""
Build Inspector.

Runs a scan build with the import graph plugin attached and ties every build
message that names a file to the import chains leading to that file, so an
error deep inside a dependency tree can be traced back to the entry point
that pulled it in.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..config import ERROR_CHAIN_INDENT, ERROR_CHAIN_LIMIT, TracerConfig
from ..core.types import ImportChain
from ..plugin.host import BuildMessage
from ..plugin.import_graph import ImportGraphPlugin
from .scanner import ScanBuild

logger = logging.getLogger(__name__)


@dataclass
class InspectResult:
    """
    Result of inspecting a build.

    Attributes:
        errors: Errors followed by warnings reported by the build.
        inputs: Absolute paths of every file the build loaded.
        plugin: The plugin holding the build's import graph.
    """

    plugin: ImportGraphPlugin
    errors: List[BuildMessage] = field(default_factory=list)
    inputs: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(e.kind == "error" for e in self.errors)

    def format_errors(self) -> List[str]:
        return [e.render() for e in self.errors]

    def import_chains(self) -> List[ImportChain]:
        """Import chains of every file named by a build message."""
        return [
            self.plugin.get_import_chains(e.file_name)
            for e in self.errors
            if e.file_name
        ]

    def format_import_chains(self) -> List[str]:
        return self.plugin.format_import_chains(self.import_chains())

    def debug(
        self,
        limit: int = -1,
        filter: Optional[Callable[[BuildMessage], bool]] = None,
    ) -> str:
        """
        Render every message followed by the chains that lead to its file.

        Args:
            limit: Maximum number of messages to show, -1 for all.
            filter: Only show messages for which this returns True.
        """
        if limit < 0:
            limit = len(self.errors)

        lines: List[str] = []
        for e in self.errors[:limit]:
            if filter and not filter(e):
                continue
            lines.append(e.render())
            if not e.file_name:
                continue

            chain = self.plugin.get_import_chains(e.file_name)
            if not chain.found or not chain.chains:
                continue
            formatted = self.plugin.format_import_chains([chain], ERROR_CHAIN_INDENT, ERROR_CHAIN_LIMIT)
            lines.extend(formatted)
            if formatted:
                lines.append("")
        return "\n".join(lines)


async def inspect_build(
    entry_points: Sequence[str],
    config: Optional[TracerConfig] = None,
    externals: Sequence[str] = (),
) -> InspectResult:
    """
    Inspect the build rooted at the given entry points.

    Args:
        entry_points: Entry files, absolute or relative to the working directory.
        config: Tracing options.
        externals: Bare specifiers the build must leave unresolved.
    """
    config = config or TracerConfig()
    plugin = ImportGraphPlugin(config)
    build = ScanBuild.from_config(entry_points, config, plugins=[plugin])
    build.initial_options.externals = list(externals)

    result = await build.run()
    logger.debug(f"Inspected build: {len(result.errors)} errors, {len(result.warnings)} warnings")

    inputs = list(result.metafile.inputs) if result.metafile else []
    return InspectResult(plugin=plugin, errors=[*result.errors, *result.warnings], inputs=inputs)
