"""
Base Parser Infrastructure.

Defines the interface every specifier parser implements. The graph and the
resolver only ever see `SpecifierParser`, so a lexical implementation can be
replaced by a tokenizer or AST walker without touching them.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union


class SpecifierParser(ABC):
    """
    Abstract base class for import specifier extraction.
    """

    def __init__(self):
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def extensions(self) -> List[str]:
        return []

    def can_parse(self, file_path: Union[str, Path]) -> bool:
        """Determine whether this parser scans files with the given extension."""
        return Path(file_path).suffix.lower() in self.extensions

    @abstractmethod
    def parse(self, text: str, file_path: Union[str, Path]) -> List[str]:
        """
        Extract raw specifiers from source text.

        Files the parser does not support yield an empty list.
        """
        pass


def read_source(file_path: Union[str, Path]) -> str:
    """Read a source file as UTF-8 text."""
    with open(file_path, encoding="utf-8") as f:
        return f.read()
