"""
Global Configuration and Resolution Defaults.

This module centralizes the constants that drive specifier extraction and
module resolution, and the user-facing `TracerConfig` loaded from
`importchain.toml` or the `[tool.importchain]` table of `pyproject.toml`.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

# --- Source Scanning ---

# Only these extensions are scanned for import specifiers
SCANNABLE_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")

# Specifiers starting with these prefixes never resolve to local files
IGNORED_SPECIFIER_PREFIXES: Tuple[str, ...] = ("data:", "http:", "https:")

# --- Resolution ---

# Probe order, the literal path ("") always wins
RESOLVE_SUFFIXES: Tuple[str, ...] = ("", ".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs", ".json")

INDEX_BASENAME = "index"
NODE_MODULES = "node_modules"
PACKAGE_JSON = "package.json"
DEFAULT_PACKAGE_MAIN = "index.js"

# Conditions read from an "exports" entry, in priority order
EXPORT_CONDITIONS: Tuple[str, ...] = ("import", "require", "default")

# --- Formatting ---

DEFAULT_INDENT = ""
DEFAULT_LIMIT = -1

# Limit used when chains are attached to individual build errors
ERROR_CHAIN_INDENT = "    "
ERROR_CHAIN_LIMIT = 10

CONFIG_FILENAME = "importchain.toml"


class ConfigError(Exception):
    """
    Raised when a configuration file cannot be read or validated.

    Attributes:
        path: The offending configuration file.
        message: Human-readable error message.
    """

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class TracerConfig(BaseModel):
    """
    Options shared by the graph, the plugin adapter and the CLI.

    Attributes:
        track_externals: Record files inside node_modules as graph nodes.
        follow_externals: Let the scan build load files inside node_modules.
        strict_lookup: Disable the suffix/basename fallback of target lookup.
        cache_resolutions: Memoize resolutions for the duration of a build.
        limit: Maximum number of chains to format, -1 for no limit.
        indent: Indentation prefix of formatted chains.
        color: Style formatted chains for a terminal.
    """

    model_config = ConfigDict(extra="forbid")

    track_externals: bool = False
    follow_externals: bool = False
    strict_lookup: bool = False
    cache_resolutions: bool = True
    limit: int = DEFAULT_LIMIT
    indent: str = DEFAULT_INDENT
    color: bool = False

    def merged(self, **overrides: Any) -> "TracerConfig":
        """Return a copy with every non-None override applied."""
        update = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=update)


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path, f"invalid TOML: {e}") from e
    except OSError as e:
        raise ConfigError(path, f"cannot read file: {e}") from e


def find_config_file(start: Path) -> Optional[Path]:
    """
    Locate the nearest configuration file at or above `start`.

    An `importchain.toml` wins over a `pyproject.toml` in the same directory;
    a `pyproject.toml` only counts when it has a `[tool.importchain]` table.
    Unreadable `pyproject.toml` files are skipped.
    """
    current = start.resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / "pyproject.toml"
        if not pyproject.is_file():
            continue
        try:
            tool = _read_toml(pyproject).get("tool", {})
        except ConfigError as e:
            logger.debug(f"Skipping {pyproject}: {e.message}")
            continue
        if "importchain" in tool:
            return pyproject
    return None


def load_config(path: Optional[Path] = None, start: Optional[Path] = None) -> TracerConfig:
    """
    Load a TracerConfig.

    Args:
        path: Explicit configuration file. When omitted the nearest file above
            `start` (default: the working directory) is used, and defaults are
            returned when there is none.
        start: Directory to begin the upward search from.

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or contains
            unknown or mistyped keys.
    """
    if path is None:
        path = find_config_file(start or Path.cwd())
        if path is None:
            return TracerConfig()

    data = _read_toml(path)
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("importchain", {})

    try:
        return TracerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e
