"""
Host Build Contract.

The types a bundler must provide for the import graph plugin to attach to
it. The shape follows esbuild's plugin API: a `setup(build)` call during
which the plugin registers resolve, load and end callbacks.
"""

from enum import StrEnum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field


class EntryPoint(BaseModel):
    """An entry point given as an input/output pair."""

    model_config = ConfigDict(populate_by_name=True)

    in_: str = Field(alias="in")
    out: Optional[str] = None


class BuildOptions(BaseModel):
    """
    Initial options of a host build.

    Attributes:
        entry_points: Input paths, `{in, out}` pairs, or an output-name mapping.
        follow_externals: Whether the host loads files inside node_modules.
        externals: Bare specifiers the host leaves unbundled.
    """

    entry_points: Union[List[Union[str, EntryPoint]], Dict[str, str]] = Field(default_factory=list)
    follow_externals: bool = False
    externals: List[str] = Field(default_factory=list)

    def entry_paths(self) -> List[str]:
        """Flatten every supported entry point form to plain paths."""
        if isinstance(self.entry_points, dict):
            return list(self.entry_points.values())
        return [ep if isinstance(ep, str) else ep.in_ for ep in self.entry_points]


class MessageKind(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class BuildMessage(BaseModel):
    """An error or warning reported by the host build."""

    text: str
    kind: MessageKind = MessageKind.ERROR
    file_name: Optional[str] = None
    line: Optional[int] = None

    def render(self) -> str:
        if not self.file_name:
            return f"{self.kind}: {self.text}"
        location = f"{self.file_name}:{self.line}" if self.line else self.file_name
        return f"{location}: {self.kind}: {self.text}"


class MetafileImport(BaseModel):
    path: str
    external: bool = False


class MetafileInput(BaseModel):
    imports: List[MetafileImport] = Field(default_factory=list)


class Metafile(BaseModel):
    """Dependency metadata emitted by the host, keyed by input path."""

    inputs: Dict[str, MetafileInput] = Field(default_factory=dict)


class BuildResult(BaseModel):
    errors: List[BuildMessage] = Field(default_factory=list)
    warnings: List[BuildMessage] = Field(default_factory=list)
    metafile: Optional[Metafile] = None


class ResolveArgs(BaseModel):
    path: str
    importer: Optional[str] = None
    kind: str = "import-statement"


class LoadArgs(BaseModel):
    path: str


ResolveCallback = Callable[[ResolveArgs], Any]
LoadCallback = Callable[[LoadArgs], Union[Any, Awaitable[Any]]]
EndCallback = Callable[[BuildResult], Any]


class PluginBuild(Protocol):
    """The build object handed to `Plugin.setup`."""

    initial_options: BuildOptions

    def on_resolve(self, callback: ResolveCallback, filter: str = ".*") -> None:
        ...

    def on_load(self, callback: LoadCallback, filter: str = ".*") -> None:
        ...

    def on_end(self, callback: EndCallback) -> None:
        ...


class Plugin(Protocol):
    """A host plugin: a name plus a setup hook."""

    name: str

    def setup(self, build: PluginBuild) -> None:
        ...
