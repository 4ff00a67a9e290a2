"""Frontend interfaces for the sparse Game of Life."""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]
