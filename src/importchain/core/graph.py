"""
Import Graph implementation backed by rustworkx.

It manages:
- The bimap between absolute file paths and rustworkx integer indices.
- Bidirectional import relations (imports / imported-by) as directed edges.
- The set of entry points declared by the host build.
- Chain tracing: every root-to-target path through the graph.

Edges always point importer -> imported, so a node's successors are its
imports and its predecessors are its importers.
"""

import logging
import os
import re
from typing import Any, Dict, Iterator, List, Optional, Set

import rustworkx as rx

from ..config import NODE_MODULES
from .types import GraphNode, ImportChain

logger = logging.getLogger(__name__)

_LEADING_DOT_SLASH = re.compile(r"^\./")


def normalize_path(file_path: str) -> str:
    """Absolute, OS-normalized form used as the graph key."""
    return os.path.abspath(file_path)


def is_external(file_path: str) -> bool:
    """
    Check whether a path refers to an external module.

    External means the path has a `node_modules` segment, or it is neither
    absolute nor relative, i.e. a bare specifier that never became a file.
    """
    segments = re.split(r"[\\/]", file_path)
    if NODE_MODULES in segments:
        return True
    return not (file_path.startswith((".", "/")) or os.path.isabs(file_path))


class ImportGraph:
    """
    Bidirectional import graph of a single build.

    Features:
    - O(1) node lookup via the path-to-index bimap
    - Idempotent node and edge insertion
    - Cycle-safe chain tracing over importer edges

    Example:
        ```python
        graph = ImportGraph()
        graph.add_entry_point("/proj/entry.js")
        graph.add_import_relation("/proj/entry.js", "/proj/a.js")
        graph.get_import_chains("/proj/a.js").chains
        # [["/proj/entry.js", "/proj/a.js"]]
        ```
    """

    def __init__(self, track_externals: bool = False, strict_lookup: bool = False):
        """
        Initialize an empty graph.

        Args:
            track_externals: Record node_modules files and bare specifiers as nodes.
            strict_lookup: Only match query targets by canonical path.
        """
        self.track_externals = track_externals
        self.strict_lookup = strict_lookup
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[str, int] = {}
        self._entry_points: Set[str] = set()

    # --- Mutation ---

    def ensure_node(self, file_path: str) -> str:
        """Create an empty node for the path if it does not exist yet."""
        key = normalize_path(file_path)
        if key not in self._id_to_idx:
            self._id_to_idx[key] = self._graph.add_node(key)
        return key

    def add_import_relation(self, importer: str, imported: str) -> None:
        """
        Record that `importer` depends on `imported`.

        External targets are dropped entirely unless externals are tracked.
        """
        if not self.track_externals and is_external(imported):
            return

        importer_key = self.ensure_node(importer)
        imported_key = self.ensure_node(imported)

        u = self._id_to_idx[importer_key]
        v = self._id_to_idx[imported_key]
        if not self._graph.has_edge(u, v):
            self._graph.add_edge(u, v, None)

    def add_entry_point(self, file_path: str) -> str:
        """Register an entry point of the build and ensure its node."""
        key = self.ensure_node(file_path)
        self._entry_points.add(key)
        return key

    def clear(self) -> None:
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx.clear()
        self._entry_points.clear()

    # --- Lookup ---

    def has_node(self, file_path: str) -> bool:
        return file_path in self._id_to_idx

    def get_node(self, file_path: str) -> Optional[GraphNode]:
        """Snapshot of a node by exact key, or None."""
        idx = self._id_to_idx.get(file_path)
        if idx is None:
            return None
        return GraphNode(
            path=file_path,
            imports={self._graph[i] for i in self._graph.successor_indices(idx)},
            imported_by={self._graph[i] for i in self._graph.predecessor_indices(idx)},
        )

    def is_entry_point(self, file_path: str) -> bool:
        return file_path in self._entry_points

    @property
    def entry_points(self) -> Set[str]:
        return set(self._entry_points)

    def iter_paths(self) -> Iterator[str]:
        """Iterate node keys in insertion order."""
        return iter(list(self._id_to_idx))

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    # --- Chain tracing ---

    def _find_target(self, target_path: str) -> Optional[str]:
        """
        Map a requested target onto a graph key.

        Tries a fixed list of representations first, then (unless strict)
        the first node whose key ends with the target or shares its basename.
        """
        if not target_path:
            return None

        stripped = _LEADING_DOT_SLASH.sub("", target_path)
        candidates = [
            target_path,
            os.path.abspath(target_path),
            os.path.normpath(target_path),
            stripped,
            os.path.abspath(stripped),
        ]
        for candidate in candidates:
            if candidate in self._id_to_idx:
                return candidate

        if self.strict_lookup:
            return None

        target_basename = os.path.basename(target_path)
        for key in self._id_to_idx:
            if key.endswith(target_path) or os.path.basename(key) == target_basename:
                logger.debug(f"Found target by partial match: {key}")
                return key
        return None

    def get_import_chains(self, target_path: str, max_chains: Optional[int] = None) -> ImportChain:
        """
        Get all import chains leading to a target file.

        Walks importer edges upward from the target with an explicit
        stack, so long chains do not hit the recursion limit. The visited set
        only holds the nodes of the current path: cycles terminate while
        converging paths are still enumerated.

        Args:
            target_path: Absolute, relative or partial path of the target.
            max_chains: Stop after this many chains were collected.

        Returns:
            ImportChain with chains ordered root -> target.
        """
        resolved = self._find_target(target_path)
        if resolved is None:
            logger.debug(f"Target not found: {target_path} (graph has {self.node_count} nodes)")
            return ImportChain(target=target_path, chains=[], found=False)

        chains: List[List[str]] = []
        start = self._id_to_idx[resolved]
        path: List[int] = [start]
        on_path: Set[int] = {start}
        # Remaining importers of every node on the current path
        frames: List[Iterator[int]] = [iter(self._graph.predecessor_indices(start))]

        while frames:
            if max_chains is not None and len(chains) >= max_chains:
                break

            importer = next(frames[-1], None)
            if importer is None:
                frames.pop()
                on_path.discard(path.pop())
                continue
            if importer in on_path:
                continue

            path.append(importer)
            grand_importers = self._graph.predecessor_indices(importer)
            if len(grand_importers) == 0:
                chains.append([self._graph[i] for i in reversed(path)])
                path.pop()
                continue

            on_path.add(importer)
            frames.append(iter(grand_importers))

        # Entry points and root-less cycles still yield the target itself
        if not chains:
            if not self.is_entry_point(resolved):
                logger.debug(f"No root reachable from {resolved}, reporting it alone")
            chains.append([resolved])

        return ImportChain(target=target_path, chains=chains, found=True, resolved=resolved)

    # --- Reporting ---

    def get_stats(self) -> Dict[str, Any]:
        roots = sum(1 for idx in self._graph.node_indices() if self._graph.in_degree(idx) == 0)
        externals = sum(1 for key in self._id_to_idx if is_external(key))
        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "entry_points": len(self._entry_points),
            "roots": roots,
            "externals": externals,
            "backend": "rustworkx",
        }

    def to_dict(self) -> Dict[str, Any]:
        nodes = {}
        for key in self._id_to_idx:
            node = self.get_node(key)
            nodes[key] = {
                "imports": sorted(node.imports),
                "imported_by": sorted(node.imported_by),
            }
        return {
            "nodes": nodes,
            "entry_points": sorted(self._entry_points),
            "stats": self.get_stats(),
        }

    def describe(self, pattern: str | None = None) -> List[str]:
        """
        Human-readable dump of the graph for debugging.

        Args:
            pattern: Only include nodes whose path contains this substring.
        """
        lines = [
            "=== Import Graph ===",
            f"Total nodes: {self.node_count}",
            f"Entry points: {len(self._entry_points)}",
        ]
        for key in self._id_to_idx:
            if pattern and pattern not in key:
                continue
            node = self.get_node(key)
            lines.append(f"{key}:")
            if node.imports:
                lines.append("  imports:")
                lines.extend(f"    -> {p}" for p in sorted(node.imports))
            if node.imported_by:
                lines.append("  imported by:")
                lines.extend(f"    <- {p}" for p in sorted(node.imported_by))
        lines.append("=== End ===")
        return lines
