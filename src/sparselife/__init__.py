"""Sparse, unbounded Conway's Game of Life."""

__version__ = "0.1.0"

from .core.world import Coordinate, World
from .core.game import GameOfLife, advance
from .core.snapshot import ParseError, parse_world, render_world
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Coordinate",
    "World",
    "GameOfLife",
    "advance",
    "ParseError",
    "parse_world",
    "render_world",
    "Pattern",
    "PatternLibrary",
]
