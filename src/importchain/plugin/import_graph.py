"""
Import Graph Plugin.

Builds the import graph while a host build runs, independently of the host's
own resolver, so chains are available even when the build fails. Every file
the host loads is read, scanned for specifiers and resolved; the host still
performs the actual load.

Note:
    Resolution across package boundaries is best effort, so chains through
    node_modules may be incomplete.
"""

import asyncio
import logging
import os
from typing import List, Optional

from ..config import TracerConfig
from ..core.formatter import format_import_chains
from ..core.graph import ImportGraph, is_external
from ..core.resolver import ModuleResolver
from ..core.types import ImportChain
from ..parsing.base import SpecifierParser, read_source
from ..parsing.javascript import JavaScriptParser
from .host import BuildResult, LoadArgs, Metafile, PluginBuild, ResolveArgs

logger = logging.getLogger(__name__)


class ImportGraphPlugin:
    """
    Host plugin recording import relations of every loaded file.

    Attributes:
        name: Plugin name reported to the host.
        graph: The graph of the current (or last) build.
        resolver: Module resolver used for every specifier.
        parser: Specifier parser used for every loaded file.
    """

    name = "import-graph"

    def __init__(
        self,
        config: Optional[TracerConfig] = None,
        parser: Optional[SpecifierParser] = None,
        resolver: Optional[ModuleResolver] = None,
        debug: Optional[logging.Logger] = None,
    ):
        """
        Initialize the plugin.

        Args:
            config: Tracing options, defaults to TracerConfig().
            parser: Specifier parser, defaults to the JavaScript parser.
            resolver: Module resolver, defaults to one honoring the config cache flag.
            debug: Logger receiving per-file diagnostics.
        """
        self.config = config or TracerConfig()
        self.graph = ImportGraph(
            track_externals=self.config.track_externals,
            strict_lookup=self.config.strict_lookup,
        )
        self.parser = parser or JavaScriptParser()
        self.resolver = resolver or ModuleResolver(cache=self.config.cache_resolutions)
        self._debug = debug or logger

    @property
    def track_externals(self) -> bool:
        return self.graph.track_externals

    # --- Host hooks ---

    def setup(self, build: PluginBuild) -> None:
        """Start a fresh graph, register entry points and hook into the build."""
        self.graph.clear()
        self.resolver.clear_cache()

        for entry in build.initial_options.entry_paths():
            self.graph.add_entry_point(os.path.abspath(entry))

        build.on_resolve(self.on_resolve)
        build.on_load(self.on_load)
        build.on_end(self.on_end)

    def on_resolve(self, args: ResolveArgs) -> None:
        """Leave resolution to the host."""
        return None

    async def on_load(self, args: LoadArgs) -> None:
        """
        Record the import relations of a loaded file.

        Read failures are logged and the file contributes no edges. Always
        returns None so the host performs the load itself.
        """
        file_path = args.path
        if not self.track_externals and is_external(file_path):
            return None

        self.graph.ensure_node(file_path)

        try:
            content = await asyncio.to_thread(read_source, file_path)
        except (OSError, UnicodeDecodeError) as e:
            self._debug.debug(f"Error reading file {file_path}: {e}")
            return None

        for specifier in self.parser.parse(content, file_path):
            resolved = await asyncio.to_thread(self.resolver.resolve, specifier, file_path)
            if resolved is None:
                continue
            if not is_external(file_path):
                self._debug.debug(f'Resolved import "{specifier}" in file "{file_path}" to "{resolved}"')
            self.graph.add_import_relation(file_path, resolved)

        return None

    def on_end(self, result: BuildResult) -> None:
        self._debug.debug(f"[ImportGraph] Build ended. Graph has {self.graph.node_count} nodes")
        if result.metafile is not None:
            self._debug.debug("[ImportGraph] Enhancing graph with metafile data")
            self.enhance_with_metafile(result.metafile)

    def enhance_with_metafile(self, metafile: Metafile) -> None:
        """Merge the host's own dependency metadata into the graph."""
        for input_path, entry in metafile.inputs.items():
            importer = os.path.abspath(input_path)
            for imp in entry.imports:
                if not self.track_externals and imp.external:
                    continue
                self.graph.add_import_relation(importer, os.path.abspath(imp.path))

    # --- Query surface ---

    def get_import_chains(self, target_path: str) -> ImportChain:
        return self.graph.get_import_chains(target_path)

    def format_import_chains(
        self,
        import_chains: List[ImportChain],
        indent: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[str]:
        return format_import_chains(
            import_chains,
            indent=self.config.indent if indent is None else indent,
            limit=self.config.limit if limit is None else limit,
            color=self.config.color,
        )
