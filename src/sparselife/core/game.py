"""Conway's Game of Life on a sparse, unbounded world."""

from typing import Deque, Dict, FrozenSet, Optional, Tuple
from collections import deque
import numpy as np

from .world import Coordinate, World, count_living_neighbors, interesting_cells


def advance(current: World) -> World:
    """Compute the next generation.

    Implements the classic rules, evaluated on ``current`` only:
    - Any cell with exactly 3 living neighbors is alive next generation
    - A living cell with exactly 2 living neighbors survives
    - All other cells die or stay dead

    Only living cells and their neighbors are visited; every other cell
    has no living neighbor and stays dead.

    Args:
        current: World for this generation, left unmodified

    Returns:
        New world holding exactly the cells alive next generation
    """
    future = World()

    for coord in interesting_cells(current):
        living_neighbors = count_living_neighbors(current, coord)
        if living_neighbors == 3:
            future.bring_to_life(coord)
        elif living_neighbors == 2 and current.is_alive(coord):
            future.bring_to_life(coord)

    return future


class GameOfLife:
    """Generation sequence over a sparse world.

    Wraps :func:`advance` with generation counting, population history and
    cycle detection. Iterating a game yields each following generation
    forever; stop iterating to stop the simulation.
    """

    def __init__(self, world: Optional[World] = None) -> None:
        """Initialize the game with a seed world.

        Args:
            world: Initial world (copied); an empty world when omitted
        """
        self._world = world.copy() if world is not None else World()
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[FrozenSet[Coordinate]] = deque(maxlen=1000)
        self._seen_states: Dict[FrozenSet[Coordinate], int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        # Track initial population
        self._update_population_history()

    @property
    def world(self) -> World:
        """World of the current generation.

        This is the game's own world, not a copy. After changing it in place,
        call :meth:`clear_cycle_detection`.
        """
        return self._world

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._world.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def __iter__(self) -> "GameOfLife":
        return self

    def __next__(self) -> World:
        return self.step()

    def step(self) -> World:
        """Advance the simulation by one generation.

        Returns:
            The new current world
        """
        self._check_for_cycles()

        self._world = advance(self._world)

        self._generation += 1
        self._update_population_history()
        return self._world

    def _update_population_history(self) -> None:
        """Update the population history."""
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current state has been seen before (cycle detection).

        States are compared by their exact set of living cells, so a
        pattern that repeats at a different position is not a cycle.
        """
        if self._cycle_detected:
            return

        current_state = self._world.living_cells

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            return

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

        # Forget states that dropped out of the history window
        if len(self._state_history) > 900:
            old_state = self._state_history[0]
            if old_state in self._seen_states:
                if self._seen_states[old_state] == self._generation - len(self._state_history) + 1:
                    del self._seen_states[old_state]

    def clear_cycle_detection(self) -> None:
        """Clear cycle detection state while preserving generation and population history.

        Call this after editing the current world in place, since states
        recorded before the edit no longer describe the same sequence.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def reset(self, world: Optional[World] = None) -> None:
        """Re-seed the simulation.

        Args:
            world: New seed world (copied); an empty world when omitted
        """
        self._world = world.copy() if world is not None else World()
        self._generation = 0
        self._population_history.clear()
        self._state_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it dies out or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        if len(self._population_history) < 2:
            return 0.0

        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def get_statistics(self) -> Dict:
        """Get comprehensive simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self._world.get_bounding_box()

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
            stats["population_density"] = self.population / (box_width * box_height)
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0
            stats["population_density"] = 0.0

        return stats
