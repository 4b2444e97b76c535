"""Command line interface for importchain."""

from .main import main

__all__ = ["main"]
