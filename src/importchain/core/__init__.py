"""
Core modules for importchain.

This package contains the fundamental building blocks:
- types: Data structures (GraphNode, ImportChain)
- graph: In-memory bidirectional import graph and chain tracer
- resolver: JS/TS module resolution against the filesystem
- formatter: Human-readable rendering of import chains
"""

from .formatter import find_common_base_path, format_import_chains
from .graph import ImportGraph, is_external, normalize_path
from .resolver import ModuleResolver, is_ignored_specifier, split_package_specifier
from .types import GraphNode, ImportChain

__all__ = [
    # Types
    "GraphNode", "ImportChain",
    # Graph
    "ImportGraph", "is_external", "normalize_path",
    # Resolution
    "ModuleResolver", "is_ignored_specifier", "split_package_specifier",
    # Formatting
    "find_common_base_path", "format_import_chains",
]
