"""
JavaScript/TypeScript parsing module for importchain.

Usage:
    from importchain.parsing.javascript import JavaScriptParser

    parser = JavaScriptParser()
    specifiers = parser.parse(text, Path("app.ts"))
"""

from .parser import JavaScriptParser, create_javascript_parser

__all__ = [
    "JavaScriptParser",
    "create_javascript_parser",
]
