"""Plain-text world snapshots.

A snapshot is a block of rows separated by line breaks. Each character is
one cell: '0' is alive and '.' is dead. Row index is y (growing downward)
and column index is x.
"""

from .world import Coordinate, World

ALIVE_CHAR = "0"
DEAD_CHAR = "."
ROW_SEPARATOR = "\n"


class ParseError(ValueError):
    """Raised when a snapshot contains a character outside '.', '0' and newline."""

    def __init__(self, char: str, index: int, x: int, y: int) -> None:
        """Initialize the error.

        Args:
            char: The offending character
            index: Offset of the character in the input string
            x: Column of the character
            y: Row of the character
        """
        self.char = char
        self.index = index
        self.x = x
        self.y = y
        super().__init__(
            f"Unsupported character {char!r} at row {y}, column {x} (offset {index}); "
            f"expected '{DEAD_CHAR}', '{ALIVE_CHAR}' or a line break"
        )


def parse_world(text: str) -> World:
    """Build a world from a text snapshot.

    Args:
        text: Snapshot text

    Returns:
        World with a living cell for every '0'

    Raises:
        ParseError: If the text contains an unsupported character
    """
    world = World()
    x, y = 0, 0

    for index, char in enumerate(text):
        if char == ROW_SEPARATOR:
            x = 0
            y += 1
            continue

        if char == ALIVE_CHAR:
            world.bring_to_life(Coordinate(x, y))
        elif char != DEAD_CHAR:
            raise ParseError(char, index, x, y)

        x += 1

    return world


def render_world(world: World) -> str:
    """Render a world as a text snapshot.

    The rendered area spans (0, 0) to (max_x + 1, max_y), so every row
    carries one trailing dead column. Each row ends with a line break.

    Args:
        world: World to render

    Returns:
        Snapshot text
    """
    cells = world.to_array()
    width, height = cells.shape

    result = []
    for y in range(height):
        row = []
        for x in range(width):
            row.append(ALIVE_CHAR if cells[x, y] else DEAD_CHAR)
        result.append("".join(row) + ROW_SEPARATOR)
    return "".join(result)
