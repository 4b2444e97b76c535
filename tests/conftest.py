"""Shared fixtures for importchain tests."""

import json
from pathlib import Path
from typing import Callable, Dict, Union

import pytest


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[[Dict[str, Union[str, dict]]], Path]:
    """
    Create a file tree under tmp_path.

    Values that are dicts are written as JSON (package.json files).
    Returns the project root.
    """

    def _make(files: Dict[str, Union[str, dict]]) -> Path:
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                content = json.dumps(content)
            path.write_text(content)
        return tmp_path

    return _make
