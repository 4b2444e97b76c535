"""
Scan Build - a minimal in-process host build.

Implements the `PluginBuild` contract without producing any output: starting
from the entry points it loads every reachable file once, runs the
registered resolve/load hooks for it and follows its resolved imports. The
result carries unresolvable relative imports and unreadable files as
errors, plus a metafile describing every loaded input.
"""

import asyncio
import inspect
import logging
import os
import re
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Pattern, Sequence, Set, Tuple

from ..config import TracerConfig
from ..core.graph import is_external
from ..core.resolver import ModuleResolver, is_ignored_specifier, is_relative_specifier
from ..parsing.base import SpecifierParser, read_source
from ..parsing.javascript import JavaScriptParser
from ..plugin.host import (
    BuildMessage,
    BuildOptions,
    BuildResult,
    EndCallback,
    LoadArgs,
    LoadCallback,
    MessageKind,
    Metafile,
    MetafileImport,
    MetafileInput,
    Plugin,
    ResolveArgs,
    ResolveCallback,
)

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _line_of(text: str, specifier: str) -> Optional[int]:
    """1-based line of the first quoted occurrence of a specifier."""
    for quote in ("'", '"', "`"):
        index = text.find(f"{quote}{specifier}{quote}")
        if index != -1:
            return text.count("\n", 0, index) + 1
    return None


class ScanBuild:
    """
    Host build that discovers files by following imports.

    Attributes:
        initial_options: Options handed to plugins during setup.
        plugins: Plugins set up at the start of every run.

    Example:
        ```python
        plugin = ImportGraphPlugin()
        build = ScanBuild(BuildOptions(entry_points=["src/index.ts"]), [plugin])
        result = asyncio.run(build.run())
        ```
    """

    def __init__(
        self,
        options: BuildOptions,
        plugins: Sequence[Plugin] = (),
        parser: Optional[SpecifierParser] = None,
        resolver: Optional[ModuleResolver] = None,
    ):
        self.initial_options = options
        self.plugins = list(plugins)
        self.parser = parser or JavaScriptParser()
        self.resolver = resolver or ModuleResolver()
        self._resolve_callbacks: List[Tuple[Pattern[str], ResolveCallback]] = []
        self._load_callbacks: List[Tuple[Pattern[str], LoadCallback]] = []
        self._end_callbacks: List[EndCallback] = []

    @classmethod
    def from_config(cls, entry_points: Sequence[str], config: TracerConfig, plugins: Sequence[Plugin] = ()) -> "ScanBuild":
        options = BuildOptions(entry_points=list(entry_points), follow_externals=config.follow_externals)
        return cls(options, plugins, resolver=ModuleResolver(cache=config.cache_resolutions))

    # --- PluginBuild ---

    def on_resolve(self, callback: ResolveCallback, filter: str = ".*") -> None:
        self._resolve_callbacks.append((re.compile(filter), callback))

    def on_load(self, callback: LoadCallback, filter: str = ".*") -> None:
        self._load_callbacks.append((re.compile(filter), callback))

    def on_end(self, callback: EndCallback) -> None:
        self._end_callbacks.append(callback)

    # --- Running ---

    def _is_declared_external(self, specifier: str) -> bool:
        return any(
            specifier == name or specifier.startswith(f"{name}/")
            for name in self.initial_options.externals
        )

    async def _run_resolve_hooks(self, args: ResolveArgs) -> None:
        for pattern, callback in self._resolve_callbacks:
            if pattern.search(args.path) and await _maybe_await(callback(args)) is not None:
                return

    async def _run_load_hooks(self, args: LoadArgs) -> None:
        for pattern, callback in self._load_callbacks:
            if pattern.search(args.path) and await _maybe_await(callback(args)) is not None:
                return

    async def run(self) -> BuildResult:
        """
        Run the build: setup plugins, load every reachable file, end.

        Returns:
            BuildResult with errors, warnings and the metafile.
        """
        self._resolve_callbacks.clear()
        self._load_callbacks.clear()
        self._end_callbacks.clear()
        self.resolver.clear_cache()
        for plugin in self.plugins:
            plugin.setup(self)

        errors: List[BuildMessage] = []
        warnings: List[BuildMessage] = []
        inputs: Dict[str, MetafileInput] = {}

        queue: Deque[str] = deque()
        seen: Set[str] = set()
        for entry in self.initial_options.entry_paths():
            path = os.path.abspath(entry)
            if path not in seen:
                seen.add(path)
                queue.append(path)

        while queue:
            file_path = queue.popleft()
            await self._run_load_hooks(LoadArgs(path=file_path))

            try:
                text = await asyncio.to_thread(read_source, file_path)
            except (OSError, UnicodeDecodeError) as e:
                errors.append(BuildMessage(text=f"Could not read file: {e}", file_name=file_path))
                continue

            imports: List[MetafileImport] = []
            for specifier in self.parser.parse(text, file_path):
                if is_ignored_specifier(specifier):
                    continue
                if self._is_declared_external(specifier):
                    imports.append(MetafileImport(path=specifier, external=True))
                    continue

                await self._run_resolve_hooks(ResolveArgs(path=specifier, importer=file_path))
                resolved = await asyncio.to_thread(self.resolver.resolve, specifier, file_path)

                if resolved is None:
                    if is_relative_specifier(specifier):
                        errors.append(BuildMessage(
                            text=f'Could not resolve "{specifier}"',
                            file_name=file_path,
                            line=_line_of(text, specifier),
                        ))
                    else:
                        warnings.append(BuildMessage(
                            text=f'Could not resolve package "{specifier}", treating it as external',
                            kind=MessageKind.WARNING,
                            file_name=file_path,
                            line=_line_of(text, specifier),
                        ))
                        imports.append(MetafileImport(path=specifier, external=True))
                    continue

                external = is_external(resolved) and not self.initial_options.follow_externals
                imports.append(MetafileImport(path=resolved, external=external))
                if not external and resolved not in seen:
                    seen.add(resolved)
                    queue.append(resolved)

            inputs[file_path] = MetafileInput(imports=imports)

        logger.debug(f"Scan build loaded {len(inputs)} files with {len(errors)} errors")

        result = BuildResult(errors=errors, warnings=warnings, metafile=Metafile(inputs=inputs))
        for callback in self._end_callbacks:
            await _maybe_await(callback(result))
        return result
