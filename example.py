#!/usr/bin/env python3
"""
Example usage of the sparselife package.
"""

from sparselife import GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the sparselife package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    game = GameOfLife(glider.to_world(offset_x=1, offset_y=1))

    print("Initial state:")
    print(game.world, end="")
    print(f"Population: {game.population}")
    print()

    # The world is unbounded, so the glider keeps travelling
    for world in game:
        print(f"Generation {game.generation}:")
        print(world, end="")
        print(f"Population: {game.population}")
        print()

        if game.generation >= 8:
            break

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
