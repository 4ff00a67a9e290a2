"""Command-line interface for the sparse Game of Life."""

import argparse
import sys
import time
import numpy as np
from typing import IO, List, Optional, Tuple

from ..core.world import World
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary
from ..core.snapshot import ParseError, parse_world, render_world


QUIT_COMMANDS = ("q", "quit", "exit")


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def load_world(self, path: str) -> World:
        """Load a world from a text snapshot file.

        Args:
            path: Path of the snapshot file

        Returns:
            Parsed World

        Raises:
            OSError: If the file cannot be read
            ParseError: If the file is not a valid snapshot
            UnicodeDecodeError: If the file is not UTF-8 text
        """
        with open(path, "r", encoding="utf-8") as f:
            return parse_world(f.read())

    def random_world(
        self,
        width: int,
        height: int,
        population_rate: float,
        seed: Optional[int] = None,
    ) -> World:
        """Create a random soup inside a width x height area at the origin.

        Args:
            width: Soup width
            height: Soup height
            population_rate: Chance each cell will be alive (0.0 to 1.0)
            seed: Random seed for reproducibility

        Returns:
            New World instance
        """
        rng = np.random.default_rng(seed)
        mask = rng.random((width, height)) < population_rate
        xs, ys = np.nonzero(mask)
        return World((int(x), int(y)) for x, y in zip(xs, ys))

    def build_world(self, args: argparse.Namespace) -> World:
        """Create the seed world described by command-line arguments.

        Raises:
            KeyError: If the requested pattern does not exist
        """
        if args.file:
            if args.verbose:
                print(f"Loading world from {args.file}")
            return self.load_world(args.file)

        if args.pattern:
            pattern = self.pattern_library.get_pattern(args.pattern)
            if pattern is None:
                raise KeyError(args.pattern)
            if args.verbose:
                print(f"Loading pattern '{args.pattern}' at ({args.pattern_x}, {args.pattern_y})")
            return pattern.to_world(args.pattern_x, args.pattern_y)

        if args.verbose:
            print(
                f"Generating random {args.width}x{args.height} soup "
                f"(rate: {args.population:.2%})"
            )
        return self.random_world(args.width, args.height, args.population, args.seed)

    def run_generations(self, world: World, generations: int, verbose: bool = False) -> GameOfLife:
        """Advance a world a fixed number of generations.

        Args:
            world: Seed world
            generations: Number of generations to advance
            verbose: Print progress updates

        Returns:
            Game positioned at the final generation
        """
        game = GameOfLife(world)
        for _ in range(generations):
            game.step()
            if verbose:
                print(f"Generation {game.generation}: {game.population} cells")
        return game

    def run_simulation(
        self,
        world: World,
        max_generations: int,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, str, dict]:
        """Run a simulation until it cycles, dies out or hits the limit.

        Args:
            world: Seed world
            max_generations: Maximum generations to run
            verbose: Print progress updates
            show_grid: Show initial and final snapshots

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        game = GameOfLife(world)
        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial world:")
            print(self._format_world(game.world), end="")

        if verbose:
            print(f"\nRunning simulation (max {max_generations} generations)...")

        start_time = time.time()
        final_generation, reason = game.run_until_stable(max_generations)
        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and reason != "extinction":
            print(f"\nFinal world (generation {final_generation}):")
            print(self._format_world(game.world), end="")

        return final_generation, reason, stats

    def run_interactive(
        self,
        world: World,
        input_stream: Optional[IO[str]] = None,
    ) -> int:
        """Advance generations as lines are read from the input stream.

        An empty line advances one generation, an integer advances that many
        and 'q' (or end of input) stops.

        Args:
            world: Seed world
            input_stream: Stream to read commands from (defaults to stdin)

        Returns:
            Generation reached when the loop stopped
        """
        stream = input_stream if input_stream is not None else sys.stdin
        game = GameOfLife(world)

        print(f"Generation {game.generation} ({game.population} cells):")
        print(self._format_world(game.world), end="")

        while True:
            print("[Enter] next, <n> advance n, q quit > ", end="", flush=True)
            line = stream.readline()
            if not line:
                print()
                break

            command = line.strip().lower()
            if command in QUIT_COMMANDS:
                break

            if command == "":
                count = 1
            else:
                try:
                    count = int(command)
                except ValueError:
                    print(f"Unrecognized command '{command}'")
                    continue
                if count < 0:
                    print("Generation count must be non-negative")
                    continue

            for _ in range(count):
                next(game)

            print(f"Generation {game.generation} ({game.population} cells):")
            print(self._format_world(game.world), end="")

        return game.generation

    def _format_world(self, world: World, max_size: int = 80) -> str:
        """Format a world snapshot for display, refusing very large ones.

        Args:
            world: World to format
            max_size: Maximum snapshot dimension to display

        Returns:
            Snapshot text ending with a line break
        """
        bbox = world.get_bounding_box()
        if bbox and (bbox[2] + 2 > max_size or bbox[3] + 1 > max_size):
            return f"World too large to display (bounding box {bbox})\n"

        return render_world(world)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on an unbounded sparse grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Step through a world read from a snapshot file, one generation per Enter
  sparselife --file world.txt

  # Advance a glider 8 generations and print the result
  sparselife --pattern Glider --generations 8

  # Run a random 20x20 soup until it cycles or dies out
  sparselife -W 20 -H 20 --population 0.3 --seed 7 --run-until-stable

  # List available patterns
  sparselife --list-patterns
        """,
    )

    # Seed configuration
    parser.add_argument("-f", "--file", type=str, help="Load the seed world from a snapshot file")

    parser.add_argument(
        "--pattern",
        type=str,
        help="Seed the world with a named pattern",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    parser.add_argument("-W", "--width", type=int, default=20, help="Random soup width (default: 20)")

    parser.add_argument("-H", "--height", type=int, default=20, help="Random soup height (default: 20)")

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.3,
        help="Random soup population rate 0.0-1.0 (default: 0.3)",
    )

    parser.add_argument("--seed", type=int, help="Random seed for the soup")

    # Simulation configuration
    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        help="Advance this many generations, print the final world and exit",
    )

    parser.add_argument(
        "-s",
        "--run-until-stable",
        action="store_true",
        help="Run until the world cycles or dies out and print statistics",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=10000,
        help="Generation limit for --run-until-stable (default: 10000)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final worlds with --run-until-stable",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List available patterns and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format a human-readable finish reason.

    Args:
        reason: Reason code from run_until_stable
        stats: Simulation statistics

    Returns:
        Description of why the simulation stopped
    """
    if reason == "cycle":
        cycle_length = stats.get("cycle_length", 0)
        if cycle_length == 1:
            return "Reached a still life"
        return f"Entered a cycle of length {cycle_length}"
    if reason == "extinction":
        return "All cells died"
    if reason == "max_generations":
        return "Reached maximum generations"
    return f"Stopped ({reason})"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Generation the simulation stopped at
        reason: Reason code from run_until_stable
        stats: Simulation statistics
        verbose: Print every statistic
    """
    print(f"Generation {final_generation}: {format_finish_reason(reason, stats)}")
    print(f"Population: {stats.get('initial_population', 0)} -> {stats['population']}")

    if verbose:
        print(f"Bounding box: {stats['bounding_box']}")
        print(f"Population density: {stats['population_density']:.2%}")
        print(f"Population change rate: {stats['population_change_rate']:.2f}")
        print(
            "Duration: {:.3f}s, Speed: {:.0f} gen/s".format(
                stats.get("duration_seconds", 0.0), stats.get("generations_per_second", 0)
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.file and args.pattern:
        errors.append("Use either --file or --pattern, not both")

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.generations is not None and args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.generations is not None and args.run_until_stable:
        errors.append("Use either --generations or --run-until-stable, not both")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    try:
        world = cli.build_world(args)
    except KeyError:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: World file {args.file} is not UTF-8 text: {e}")
        return 1
    except ParseError as e:
        print(f"Error: Invalid world file {args.file}: {e}")
        return 1
    except OSError as e:
        print(f"Error: Cannot read world file: {e}")
        return 1

    try:
        if args.generations is not None:
            game = cli.run_generations(world, args.generations, args.verbose)
            print(f"Generation {game.generation} ({game.population} cells):")
            print(cli._format_world(game.world), end="")
        elif args.run_until_stable:
            final_generation, reason, stats = cli.run_simulation(
                world,
                max_generations=args.max_generations,
                verbose=args.verbose,
                show_grid=args.show_grid,
            )
            print_results(final_generation, reason, stats, args.verbose)
        else:
            cli.run_interactive(world)

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
