"""
Chain Formatter.

Renders ImportChain results as diagnostic text. Paths are shortened against
the longest common directory of everything being rendered, so a chain reads
`./src/a.ts => ./src/b.ts` instead of repeating the project root.
"""

import os
from typing import Iterable, List, Optional

import click

from ..config import DEFAULT_INDENT, DEFAULT_LIMIT
from .types import ImportChain

ARROW = " => "


def find_common_base_path(paths: List[str]) -> Optional[str]:
    """
    Find the longest common leading directory of a list of paths.

    Paths are compared component-wise. The separator is a backslash when the
    first path contains one, a forward slash otherwise.

    Returns:
        The common base, "" for an empty input, or None when the paths share
        no leading component. The base is always a directory: when it would
        cover a whole path (a single path, or repeats of one file) its parent
        is returned instead.
    """
    if not paths:
        return ""
    if len(paths) == 1:
        return os.path.dirname(paths[0])

    separator = "\\" if "\\" in paths[0] else "/"
    first = paths[0].split(separator)
    common_length = len(first)
    shortest = len(first)

    for other in paths[1:]:
        split = other.split(separator)
        shortest = min(shortest, len(split))
        limit = min(common_length, len(split))
        j = 0
        while j < limit and first[j] == split[j]:
            j += 1
        common_length = j
        if common_length == 0:
            return None

    if common_length == shortest:
        common_length -= 1
        if common_length == 0:
            return None
    return separator.join(first[:common_length])


def _collect_paths(import_chains: Iterable[ImportChain]) -> List[str]:
    collected: List[str] = []
    for result in import_chains:
        for chain in result.chains:
            collected.extend(chain)
        collected.append(result.display_target)
    return collected


def format_import_chains(
    import_chains: List[ImportChain],
    indent: str = DEFAULT_INDENT,
    limit: int = DEFAULT_LIMIT,
    color: bool = False,
) -> List[str]:
    """
    Format a list of import chain results.

    Args:
        import_chains: Results of `get_import_chains`.
        indent: Prefix of every emitted line.
        limit: Maximum chains emitted across all results, -1 for no limit.
        color: Style labels, paths and arrows for a terminal.

    Returns:
        One entry per rendered chain or per "not found" message. An entry
        identical to the one before it is emitted only once.
    """
    common_base = find_common_base_path(_collect_paths(import_chains))
    base_length = len(os.path.abspath(common_base)) if common_base else 0

    def shorten(file_path: str) -> str:
        if not base_length:
            return file_path
        return "." + os.path.abspath(file_path)[base_length:]

    label = click.style("note", fg="bright_black") if color else "note"
    arrow = click.style(ARROW, fg="blue") if color else ARROW

    formatted: List[str] = []
    emitted = 0
    for result in import_chains:
        if not result.found or not result.chains:
            formatted.append(f'No import chain found for target "{shorten(result.display_target)}"')
            continue

        for chain in result.chains:
            if not chain:
                continue
            if limit >= 0 and emitted >= limit:
                break

            entries = []
            for file_path in chain:
                shown = shorten(file_path)
                if color:
                    shown = click.style(shown, italic=True)
                entries.append(f"\n{indent}    {shown}")

            text = f"{indent}{label}: Import chain:" + arrow.join(entries)
            if formatted and formatted[-1] == text:
                continue
            formatted.append(text)
            emitted += 1

    return formatted
