"""Command-line interface module for ead-tree."""

from .main import main

__all__ = ["main"]
