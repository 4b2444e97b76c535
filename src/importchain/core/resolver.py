"""
Module Resolver.

Turns a raw import specifier plus the importing file into an absolute file
path on disk, independently of the host bundler's own resolver.

Resolution Strategy:
    1. Relative / absolute specifiers - joined with the importer directory,
       then suffix probing and directory index probing.
    2. Bare specifiers - walk up the directory tree looking in node_modules:
       a. package.json "exports" entry (import > require > string)
       b. package.json "main" (default index.js)
       c. direct file lookup of the subpath, then its index file

This mirrors Node's algorithm closely enough for diagnostics but is not
guaranteed to match it bit for bit.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

from ..config import (
    DEFAULT_PACKAGE_MAIN,
    EXPORT_CONDITIONS,
    IGNORED_SPECIFIER_PREFIXES,
    INDEX_BASENAME,
    NODE_MODULES,
    PACKAGE_JSON,
    RESOLVE_SUFFIXES,
)

logger = logging.getLogger(__name__)


def is_ignored_specifier(specifier: str) -> bool:
    """Check for data/http(s) specifiers that never map to local files."""
    return specifier.startswith(IGNORED_SPECIFIER_PREFIXES)


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith((".", "/")) or os.path.isabs(specifier)


def split_package_specifier(specifier: str) -> Tuple[str, str]:
    """
    Split a bare specifier into package name and subpath.

    Examples:
        "react"                -> ("react", "")
        "lodash/fp/map"        -> ("lodash", "fp/map")
        "@scope/pkg/sub/file"  -> ("@scope/pkg", "sub/file")
    """
    parts = specifier.split("/")
    name_length = 2 if specifier.startswith("@") else 1
    return "/".join(parts[:name_length]), "/".join(parts[name_length:])


def _pick_export_target(entry: Any) -> Optional[str]:
    """Choose a target from an exports entry, following nested conditions."""
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        for condition in EXPORT_CONDITIONS:
            if condition in entry:
                target = _pick_export_target(entry[condition])
                if target:
                    return target
    return None


class ModuleResolver:
    """
    Resolves import specifiers to absolute file paths.

    Resolutions are memoized per build, keyed by specifier and importer
    directory. Call `clear_cache()` when a new build starts.

    Attributes:
        cache: Whether resolutions are memoized.

    Example:
        ```python
        resolver = ModuleResolver()
        resolver.resolve("./util", "/proj/src/index.ts")
        # "/proj/src/util.ts"
        ```
    """

    def __init__(self, cache: bool = True):
        self.cache = cache
        self._memo: Dict[Tuple[str, str], Optional[str]] = {}

    def clear_cache(self) -> None:
        self._memo.clear()

    def resolve(self, specifier: str, importer: str) -> Optional[str]:
        """
        Resolve a specifier imported by `importer`.

        Never raises; unresolvable specifiers return None.

        Args:
            specifier: The raw string from the import statement.
            importer: Absolute path of the importing file.

        Returns:
            Absolute path of the resolved file, or None.
        """
        if not specifier or is_ignored_specifier(specifier):
            return None

        importer_dir = os.path.dirname(os.path.abspath(importer))
        key = (specifier, importer_dir)
        if self.cache and key in self._memo:
            return self._memo[key]

        try:
            if is_relative_specifier(specifier):
                resolved = self._resolve_file_like(os.path.join(importer_dir, specifier))
            else:
                resolved = self._resolve_package(specifier, importer_dir)
        except OSError as e:
            logger.debug(f"Filesystem error resolving {specifier!r} from {importer}: {e}")
            resolved = None

        if self.cache:
            self._memo[key] = resolved
        return resolved

    # --- Probing ---

    @staticmethod
    def _probe_suffixes(base_path: str) -> Optional[str]:
        for suffix in RESOLVE_SUFFIXES:
            candidate = base_path + suffix
            if os.path.isfile(candidate):
                return candidate
        return None

    def _resolve_file_like(self, base_path: str) -> Optional[str]:
        """Probe the path with every suffix, then its index file."""
        base_path = os.path.normpath(base_path)
        found = self._probe_suffixes(base_path)
        if found:
            return found
        return self._probe_suffixes(os.path.join(base_path, INDEX_BASENAME))

    # --- Packages ---

    def _resolve_package(self, specifier: str, start_dir: str) -> Optional[str]:
        """Walk up from start_dir, trying node_modules at every level."""
        package_name, subpath = split_package_specifier(specifier)
        current_dir = start_dir

        while True:
            package_root = os.path.join(current_dir, NODE_MODULES, package_name)

            found = self._resolve_from_package_json(package_root, subpath)
            if found:
                return found

            found = self._resolve_file_like(os.path.join(package_root, subpath) if subpath else package_root)
            if found:
                return found

            parent = os.path.dirname(current_dir)
            if parent == current_dir:
                return None
            current_dir = parent

    def _read_package_json(self, package_root: str) -> Optional[Dict[str, Any]]:
        package_json = os.path.join(package_root, PACKAGE_JSON)
        if not os.path.isfile(package_json):
            return None
        try:
            with open(package_json, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable {package_json}: {e}")
            return None
        return data if isinstance(data, dict) else None

    def _resolve_from_package_json(self, package_root: str, subpath: str) -> Optional[str]:
        pkg = self._read_package_json(package_root)
        if pkg is None:
            return None

        exports = pkg.get("exports")
        if isinstance(exports, dict):
            export_key = f"./{subpath}" if subpath else "."
            target = _pick_export_target(exports.get(export_key))
            if target:
                found = self._probe_suffixes(os.path.normpath(os.path.join(package_root, target)))
                if found:
                    return found

        main = pkg.get("main")
        if not isinstance(main, str) or not main:
            main = DEFAULT_PACKAGE_MAIN
        main_path = os.path.normpath(os.path.join(package_root, main))
        if os.path.isfile(main_path):
            return main_path
        return None
