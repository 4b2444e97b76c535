"""
Parsing module for importchain.

Extracts raw import specifiers from source files. Parsers implement
`SpecifierParser` so that the lexical JavaScript parser can be swapped
for a real tokenizer later.
"""

from .base import SpecifierParser
from .javascript import JavaScriptParser, create_javascript_parser

__all__ = [
    "SpecifierParser",
    "JavaScriptParser",
    "create_javascript_parser",
]
