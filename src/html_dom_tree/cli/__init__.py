"""Command-line interface for html-dom-tree."""

from .main import main

__all__ = ["main"]
