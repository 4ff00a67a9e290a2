"""Sparse world storage for cellular automata on an unbounded grid."""

from typing import Dict, FrozenSet, Iterable, Iterator, NamedTuple, Optional, Set, Tuple
import numpy as np


class Coordinate(NamedTuple):
    """A cell address on the unbounded integer grid."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class World:
    """Sparse store of living cells.

    Only living cells are kept; a coordinate that is not a key is dead.
    Any integer coordinate is a valid address, including negative ones.
    """

    def __init__(self, cells: Optional[Iterable[Tuple[int, int]]] = None) -> None:
        """Initialize a world.

        Args:
            cells: Optional iterable of (x, y) pairs to bring to life
        """
        self._cells: Dict[Coordinate, bool] = {}
        if cells is not None:
            for x, y in cells:
                self._cells[Coordinate(x, y)] = True

    def is_alive(self, coord: Tuple[int, int]) -> bool:
        """Check whether a cell is alive.

        Args:
            coord: Cell coordinate

        Returns:
            True if the cell is alive, False otherwise
        """
        return self._cells.get(Coordinate(*coord), False)

    def bring_to_life(self, coord: Tuple[int, int]) -> None:
        """Mark a cell as alive. Does nothing if it already is."""
        self._cells[Coordinate(*coord)] = True

    def kill(self, coord: Tuple[int, int]) -> None:
        """Remove a cell. Does nothing if it is already dead."""
        self._cells.pop(Coordinate(*coord), None)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return len(self._cells)

    @property
    def living_cells(self) -> FrozenSet[Coordinate]:
        """Immutable snapshot of the living coordinates."""
        return frozenset(self._cells)

    def copy(self) -> "World":
        """Return an independent copy of this world."""
        return World(self._cells)

    def translate(self, dx: int, dy: int) -> "World":
        """Return a new world with every living cell shifted by (dx, dy)."""
        return World((x + dx, y + dy) for x, y in self._cells)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        if not self._cells:
            return None

        xs = [c.x for c in self._cells]
        ys = [c.y for c in self._cells]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_array(self) -> np.ndarray:
        """Dense view of the snapshot area as an int8 array indexed [x, y].

        The area runs from (0, 0) to (max_x + 1, max_y) inclusive, so there
        is always one blank column on the right. Cells at negative
        coordinates lie outside the area and are left out.

        Returns:
            Array of shape (max_x + 2, max_y + 1) with 1 for living cells
        """
        bbox = self.get_bounding_box()
        max_x, max_y = (bbox[2], bbox[3]) if bbox else (0, 0)
        max_x, max_y = max(max_x, 0), max(max_y, 0)

        cells = np.zeros((max_x + 2, max_y + 1), dtype=np.int8)
        for x, y in self._cells:
            if x >= 0 and y >= 0:
                cells[x, y] = 1
        return cells

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, tuple) or len(coord) != 2:
            return False
        return self.is_alive(coord)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        """Check if two worlds hold the same living cells."""
        if not isinstance(other, World):
            return False
        return self._cells.keys() == other._cells.keys()

    def __repr__(self) -> str:
        cells = ", ".join(str(c) for c in sorted(self._cells))
        return f"World([{cells}])"

    def __str__(self) -> str:
        """Text snapshot with living cells as '0' and dead as '.'."""
        from .snapshot import render_world

        return render_world(self)


def neighbors_of(coord: Tuple[int, int]) -> Set[Coordinate]:
    """Get the eight cells surrounding a coordinate.

    Args:
        coord: Center coordinate

    Returns:
        Set of the 8 coordinates at Chebyshev distance 1, never the center
    """
    x, y = coord
    neighbors = set()
    for dx in [-1, 0, 1]:
        for dy in [-1, 0, 1]:
            if dx == 0 and dy == 0:
                continue
            neighbors.add(Coordinate(x + dx, y + dy))
    return neighbors


def count_living_neighbors(world: World, coord: Tuple[int, int]) -> int:
    """Count living neighbors of a cell.

    Args:
        world: World to inspect
        coord: Cell coordinate

    Returns:
        Number of living neighbors (0-8)
    """
    return sum(1 for neighbor in neighbors_of(coord) if world.is_alive(neighbor))


def interesting_cells(world: World) -> Set[Coordinate]:
    """Get every cell whose state could change next generation.

    That is each living cell together with its eight neighbors.

    Args:
        world: Current world

    Returns:
        Set of coordinates the transition rule has to visit
    """
    interesting: Set[Coordinate] = set()
    for coord in world:
        interesting.add(coord)
        interesting.update(neighbors_of(coord))
    return interesting
