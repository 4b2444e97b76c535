"""
Core type definitions for importchain.

Query results and graph snapshots are pydantic models so that they can be
dumped to JSON by the CLI without extra glue.
"""

from typing import List, Set

from pydantic import BaseModel, ConfigDict, Field


class GraphNode(BaseModel):
    """
    Snapshot of a single file in the import graph.

    The graph owns the live adjacency; this is a copy taken at query time.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    imports: Set[str] = Field(default_factory=set)
    imported_by: Set[str] = Field(default_factory=set)

    @property
    def is_root(self) -> bool:
        """A root is a file nothing else imports."""
        return not self.imported_by


class ImportChain(BaseModel):
    """
    Result of an import chain query.

    Attributes:
        target: The path exactly as it was requested.
        chains: Path sequences ordered from a root down to the target.
        found: Whether the target matched a node of the graph.
        resolved: The graph key the target matched, if any.
    """

    target: str
    chains: List[List[str]] = Field(default_factory=list)
    found: bool = False
    resolved: str | None = None

    @property
    def display_target(self) -> str:
        return self.resolved or self.target
