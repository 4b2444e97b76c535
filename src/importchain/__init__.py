"""
importchain: Import dependency graph builder and chain tracer.

Explains why a JavaScript/TypeScript file ended up in a bundle by tracing
every import chain from the build's entry points down to that file.
"""

__version__ = "0.1.0"

from .config import ConfigError, TracerConfig, load_config
from .core import GraphNode, ImportChain, ImportGraph, ModuleResolver, format_import_chains
from .plugin import ImportGraphPlugin

__all__ = [
    "ConfigError",
    "TracerConfig",
    "load_config",
    "GraphNode",
    "ImportChain",
    "ImportGraph",
    "ModuleResolver",
    "format_import_chains",
    "ImportGraphPlugin",
]
