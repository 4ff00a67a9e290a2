"""Tests for the transition rule and the GameOfLife iterator."""

import itertools

from sparselife.core.world import World
from sparselife.core.game import GameOfLife, advance
from sparselife.core.snapshot import parse_world


class TestAdvance:
    """Test cases for the advance function."""

    def test_empty_world_stays_empty(self):
        """Nothing is born from nothing."""
        assert advance(World()) == World()

    def test_underpopulation(self):
        """Cells with fewer than two neighbors die."""
        world = parse_world(".00.")
        assert advance(world) == World()

    def test_birth(self):
        """A dead cell with exactly three neighbors is born."""
        world = parse_world("..0..\n.0.0.\n.....")
        future = advance(world)
        assert future.is_alive((2, 1))

    def test_no_birth_with_two_neighbors(self):
        """A dead cell with two neighbors stays dead."""
        world = World([(0, 0), (2, 0)])
        assert not advance(world).is_alive((1, 0))

    def test_overcrowding(self):
        """A cell with four neighbors dies."""
        world = parse_world("..0..\n.000.\n..0..")
        assert world.is_alive((2, 1))
        assert not advance(world).is_alive((2, 1))

    def test_blinker(self):
        """The blinker flips between vertical and horizontal."""
        vertical = parse_world("..0..\n..0..\n..0..")
        horizontal = advance(vertical)

        assert horizontal == World([(1, 1), (2, 1), (3, 1)])
        assert advance(horizontal) == vertical

    def test_follows_a_plan(self):
        """A sequence of snapshots is reproduced step by step."""
        seq = [
            "....\n..0.\n.0..\n.0..\n....",
            "....\n....\n.00.",
            "",
        ]
        worlds = [parse_world(s) for s in seq]

        current = worlds[0]
        for expected in worlds[1:]:
            current = advance(current)
            assert current == expected

    def test_block_still_life(self):
        """A 2x2 block never changes."""
        block = World([(4, 4), (4, 5), (5, 4), (5, 5)])
        assert advance(block) == block

    def test_negative_coordinates(self):
        """Growth across the origin is not clipped."""
        blinker = World([(-1, 0), (0, 0), (1, 0)])
        assert advance(blinker) == World([(0, -1), (0, 0), (0, 1)])

    def test_glider_moves(self):
        """A glider reappears shifted by (1, 1) after four generations."""
        glider = World([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])
        world = glider
        for _ in range(4):
            world = advance(world)
        assert world == glider.translate(1, 1)

    def test_input_unmodified(self):
        """advance never changes its input."""
        world = parse_world("..0..\n.000.\n..0..")
        before = world.living_cells
        advance(world)
        assert world.living_cells == before

    def test_deterministic(self):
        """Repeated calls on the same input give equal, independent outputs."""
        world = parse_world(".0...\n..00.\n.00..")
        first = advance(world)
        second = advance(world)

        assert first == second
        assert first is not second
        first.bring_to_life((100, 100))
        assert not second.is_alive((100, 100))


class TestGameOfLife:
    """Test cases for the GameOfLife class."""

    def test_initialization(self):
        """Test game initialization."""
        game = GameOfLife()

        assert game.world == World()
        assert game.generation == 0
        assert game.population == 0
        assert len(game.population_history) == 1
        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.cycle_start_generation == 0

    def test_seed_is_copied(self):
        """Changing the seed world afterwards does not affect the game."""
        seed = World([(0, 0)])
        game = GameOfLife(seed)
        seed.bring_to_life((5, 5))
        assert not game.world.is_alive((5, 5))

    def test_step(self):
        """step returns the new world and counts generations."""
        game = GameOfLife(World([(0, 1), (1, 1), (2, 1)]))
        world = game.step()

        assert world is game.world
        assert world == World([(1, 0), (1, 1), (1, 2)])
        assert game.generation == 1

    def test_iteration(self):
        """Iterating yields successive generations."""
        vertical = World([(5, 4), (5, 5), (5, 6)])
        game = GameOfLife(vertical)

        worlds = list(itertools.islice(game, 4))
        assert worlds[1] == vertical
        assert worlds[3] == vertical
        assert worlds[0] == worlds[2]
        assert game.generation == 4

    def test_earlier_generations_not_corrupted(self):
        """Worlds returned earlier keep their state."""
        game = GameOfLife(World([(5, 4), (5, 5), (5, 6)]))
        first = next(game)
        snapshot = first.living_cells
        next(game)
        next(game)
        assert first.living_cells == snapshot

    def test_extinction(self):
        """Test pattern that goes extinct."""
        game = GameOfLife(World([(5, 5)]))
        final_generation, reason = game.run_until_stable(100)

        assert reason == "extinction"
        assert final_generation == 1
        assert game.population == 0

    def test_cycle_detection(self):
        """Test cycle detection with blinker."""
        game = GameOfLife(World([(5, 4), (5, 5), (5, 6)]))

        for _ in range(10):
            if game.cycle_detected:
                break
            game.step()

        assert game.cycle_detected
        assert game.cycle_length == 2
        assert game.cycle_start_generation <= 2

    def test_still_life_cycle(self):
        """A block is reported as a cycle of length 1."""
        game = GameOfLife(World([(0, 0), (0, 1), (1, 0), (1, 1)]))
        _, reason = game.run_until_stable(100)

        assert reason == "cycle"
        assert game.cycle_length == 1

    def test_glider_is_not_a_cycle(self):
        """A moving pattern never repeats on an unbounded grid."""
        game = GameOfLife(World([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]))
        final_generation, reason = game.run_until_stable(40)

        assert reason == "max_generations"
        assert final_generation == 40
        assert game.population == 5

    def test_state_history_stays_bounded(self):
        """Old states are forgotten on long runs without a cycle."""
        game = GameOfLife(World([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]))
        final_generation, reason = game.run_until_stable(1500)

        assert reason == "max_generations"
        assert final_generation == 1500
        assert not game.cycle_detected
        assert len(game._state_history) <= 1000
        assert len(game._seen_states) < 1000

    def test_clear_cycle_detection_after_edit(self):
        """Editing the world in place and clearing keeps stale states out."""
        vertical = [(5, 4), (5, 5), (5, 6)]
        game = GameOfLife(World(vertical))
        game.step()
        game.step()
        history = game.population_history

        # Turn the vertical bar into a horizontal one by hand
        game.world.kill((5, 4))
        game.world.kill((5, 6))
        game.world.bring_to_life((4, 5))
        game.world.bring_to_life((6, 5))
        game.clear_cycle_detection()

        game.step()
        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.generation == 3
        assert game.population_history[:len(history)] == history

    def test_population_history(self):
        """Test population history tracking."""
        game = GameOfLife(World([(5, 5), (5, 6), (6, 5)]))
        assert game.population_history == [3]

        for i in range(3):
            game.step()
            history = game.population_history
            assert len(history) == i + 2
            assert history[-1] == game.population

    def test_reset(self):
        """reset re-seeds and clears tracking."""
        game = GameOfLife(World([(5, 4), (5, 5), (5, 6)]))
        game.run_until_stable(10)
        assert game.cycle_detected

        game.reset(World([(0, 0)]))
        assert game.generation == 0
        assert game.world == World([(0, 0)])
        assert game.population_history == [1]
        assert not game.cycle_detected
        assert game.cycle_length == 0

        game.reset()
        assert game.population == 0

    def test_population_change_rate(self):
        """Test population change rate calculation."""
        game = GameOfLife(World([(0, 0), (1, 0)]))
        assert game.get_population_change_rate() == 0.0

        game.step()
        assert game.get_population_change_rate() == -2.0

    def test_statistics(self):
        """Test statistics dictionary."""
        game = GameOfLife(World([(1, 1), (2, 1), (3, 1)]))
        stats = game.get_statistics()

        assert stats["generation"] == 0
        assert stats["population"] == 3
        assert stats["bounding_box"] == (1, 1, 3, 1)
        assert stats["bounding_box_size"] == (3, 1)
        assert stats["bounding_box_area"] == 3
        assert stats["population_density"] == 1.0

    def test_statistics_empty(self):
        """Statistics of an empty world."""
        stats = GameOfLife().get_statistics()

        assert stats["bounding_box"] is None
        assert stats["bounding_box_size"] == (0, 0)
        assert stats["bounding_box_area"] == 0
        assert stats["population_density"] == 0.0
