"""Command line interface for the recursive agent."""

from .app import main

__all__ = ["main"]
