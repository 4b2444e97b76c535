"""
Host bundler integration for importchain.

Usage:
    from importchain.plugin import ImportGraphPlugin

    plugin = ImportGraphPlugin()
    # pass `plugin` to a host build implementing PluginBuild
    plugin.get_import_chains("src/broken.ts")
"""

from .host import (
    BuildMessage,
    BuildOptions,
    BuildResult,
    EntryPoint,
    LoadArgs,
    MessageKind,
    Metafile,
    MetafileImport,
    MetafileInput,
    Plugin,
    PluginBuild,
    ResolveArgs,
)
from .import_graph import ImportGraphPlugin

__all__ = [
    "ImportGraphPlugin",
    "BuildMessage",
    "BuildOptions",
    "BuildResult",
    "EntryPoint",
    "LoadArgs",
    "MessageKind",
    "Metafile",
    "MetafileImport",
    "MetafileInput",
    "Plugin",
    "PluginBuild",
    "ResolveArgs",
]
