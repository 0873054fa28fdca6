"""
Evosnake Direction Module

Grid coordinates and the four movement directions of the snake game.
The y axis points down: BOTTOM is (0, +1), TOP is (0, -1).

Classes:
    Point:     An (x, y) cell of the board
    Direction: The four directions a snake can face or move in
"""

from enum   import Enum
from typing import NamedTuple

class Point(NamedTuple):
    """A cell of the board."""
    x: int
    y: int

    def step(self, dx: int, dy: int) -> 'Point':
        return Point(self.x + dx, self.y + dy)

class Direction(Enum):
    """
    The four directions, in the fixed order used both for the one-hot
    encoding and for decoding network outputs into actions.
    """
    LEFT   = 0
    RIGHT  = 1
    BOTTOM = 2
    TOP    = 3

    @property
    def vector(self) -> tuple[int, int]:
        """The unit (dx, dy) step for this direction."""
        return _VECTORS[self]

    def opposite(self) -> 'Direction':
        return _OPPOSITES[self]

    def one_hot(self) -> list[float]:
        """A 4-wide vector holding 1.0 at this direction's position and 0.0 elsewhere."""
        encoding = [0.0] * len(Direction)
        encoding[self.value] = 1.0
        return encoding

    @classmethod
    def from_vector(cls, dx: int, dy: int) -> 'Direction':
        """
        The direction of a (dx, dy) offset between two adjacent cells.
        Any offset other than left, right or bottom maps to TOP.
        """
        for direction, vector in _VECTORS.items():
            if vector == (dx, dy):
                return direction
        return cls.TOP

_VECTORS = {
    Direction.LEFT  : (-1,  0),
    Direction.RIGHT : ( 1,  0),
    Direction.BOTTOM: ( 0,  1),
    Direction.TOP   : ( 0, -1),
}

_OPPOSITES = {
    Direction.LEFT  : Direction.RIGHT,
    Direction.RIGHT : Direction.LEFT,
    Direction.BOTTOM: Direction.TOP,
    Direction.TOP   : Direction.BOTTOM,
}

NUM_ACTIONS = len(Direction)
