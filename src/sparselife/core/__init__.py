"""Core simulation logic."""

from .world import Coordinate, World, neighbors_of, count_living_neighbors, interesting_cells
from .game import GameOfLife, advance
from .snapshot import ParseError, parse_world, render_world
from .patterns import Pattern, PatternLibrary

__all__ = [
    "Coordinate",
    "World",
    "neighbors_of",
    "count_living_neighbors",
    "interesting_cells",
    "GameOfLife",
    "advance",
    "ParseError",
    "parse_world",
    "render_world",
    "Pattern",
    "PatternLibrary",
]
