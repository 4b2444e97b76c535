"""
In-process builds for importchain.

`ScanBuild` is a minimal host that drives plugins over every file reachable
from the entry points; `inspect_build` pairs its errors with import chains.
"""

from .inspector import InspectResult, inspect_build
from .scanner import ScanBuild

__all__ = ["InspectResult", "ScanBuild", "inspect_build"]
