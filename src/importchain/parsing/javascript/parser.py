"""
JavaScript/TypeScript Specifier Parser for importchain.

Lexical extraction of module references:
- ES module static imports (import x from "m", import "m")
- CommonJS require("m")
- Dynamic import("m")
- Re-exports (export { x } from "m", export * from "m")

This is regex based and best-effort: it can match imports inside comments or
strings and miss unusual formatting. That trade-off keeps parsing fast and
free of extra dependencies.
"""

import re
from pathlib import Path
from typing import List, Union

from ...config import SCANNABLE_EXTENSIONS
from ..base import SpecifierParser


class JavaScriptParser(SpecifierParser):
    """
    Extracts import specifiers from JS/TS source text.

    Patterns run in a fixed order (static imports, requires, dynamic imports,
    re-exports) and duplicates are kept.
    """

    IMPORT_PATTERNS = [
        # import x from "m" / import * as x from "m" / import { a } from "m" / import "m"
        re.compile(
            r"""import\s+(?:(?:type\s+)?(?:\*\s+as\s+\w+|\{[^}]*\}|\w+(?:\s*,\s*(?:\{[^}]*\}|\*\s+as\s+\w+))?)\s+from\s+)?['"]([^'"]+)['"]"""
        ),
        # require("m")
        re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
        # import("m")
        re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
        # export * from "m" / export { a } from "m"
        re.compile(r"""export\s+(?:type\s+)?(?:\*(?:\s+as\s+\w+)?|\{[^}]*\})\s*from\s+['"]([^'"]+)['"]"""),
    ]

    @property
    def name(self) -> str:
        return "javascript"

    @property
    def extensions(self) -> List[str]:
        return list(SCANNABLE_EXTENSIONS)

    def parse(self, text: str, file_path: Union[str, Path]) -> List[str]:
        if not self.can_parse(file_path):
            return []

        specifiers: List[str] = []
        for pattern in self.IMPORT_PATTERNS:
            specifiers.extend(match.group(1) for match in pattern.finditer(text))
        return specifiers


def create_javascript_parser() -> JavaScriptParser:
    """Factory function to create a JavaScript parser."""
    return JavaScriptParser()
