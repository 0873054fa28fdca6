"""
Evosnake Game Module

A minimal snake game, played one tick at a time by an agent.

The board is 'grid_width' x 'grid_height' cells; every cell outside of it is a
wall. The snake starts as a single segment in the middle of the board, facing
a random direction. Each tick it moves one cell; reaching the food makes it grow
by one segment, running into a wall or into its own body kills it.

Every game owns its random number generator, so that games advanced on
different threads stay reproducible.

Classes:
    Game: The state of one snake game
"""

import random
from typing import TYPE_CHECKING

from evosnake.game.direction import Direction, Point
if TYPE_CHECKING:
    from evosnake.run.config import Config

class Game:
    """
    The state machine of one snake game.

    Public Attributes:
        head:          The cell occupied by the head of the snake
        body:          The cells occupied by the snake, head first, tail last
        food:          The cell holding the food (None once the board is full)
        dir:           The direction the head is facing
        is_dead:       Whether the game is over
        no_food_steps: Ticks since the snake last ate
        total_steps:   Ticks played so far

    Public Methods:
        update(direction):    Advance the game by one tick
        score():              The length of the snake
        is_wall(point):       Whether a cell is outside of the board
        is_snake_body(point): Whether a cell is occupied by the body (head excluded)
    """

    def __init__(self, config: 'Config', seed: int | None = None):
        """
        Parameters:
            config: provides the board size
            seed:   seed of this game's private random number generator
        """
        self._width : int           = config.grid_width
        self._height: int           = config.grid_height
        self._rng   : random.Random = random.Random(seed)

        self.head: Point       = Point(self._width // 2, self._height // 2)
        self.body: list[Point] = [self.head]
        self.dir : Direction   = self._rng.choice(list(Direction))

        self.is_dead      : bool = False
        self.no_food_steps: int  = 0
        self.total_steps  : int  = 0

        self.food: Point | None = self._place_food()

    def update(self, direction: Direction) -> None:
        """
        Advance the game by one tick, moving the snake in the given direction.
        Reversing onto the body is not possible: in that case the snake keeps
        its current direction. Does nothing once the game is over.
        """
        if self.is_dead:
            return

        if len(self.body) > 1 and direction == self.dir.opposite():
            direction = self.dir
        self.dir = direction

        new_head = self.head.step(*direction.vector)
        self.total_steps   += 1
        self.no_food_steps += 1

        # The tail leaves its cell during this tick, unless the snake grows
        eats      = new_head == self.food
        obstacles = self.body if eats else self.body[:-1]
        if self.is_wall(new_head) or new_head in obstacles:
            self.is_dead = True
            return

        self.body.insert(0, new_head)
        self.head = new_head

        if eats:
            self.no_food_steps = 0
            self.food = self._place_food()
        else:
            self.body.pop()

    def score(self) -> int:
        return len(self.body)

    def is_wall(self, point: Point) -> bool:
        return not (0 <= point.x < self._width and 0 <= point.y < self._height)

    def is_snake_body(self, point: Point) -> bool:
        # the head is not an obstacle for itself
        return point in self.body[1:]

    def _place_food(self) -> Point | None:
        """
        Put the food on a random free cell. A full board ends the game.
        """
        occupied = set(self.body)
        free = [Point(x, y) for y in range(self._height) for x in range(self._width)
                if Point(x, y) not in occupied]
        if not free:
            self.is_dead = True
            return None
        return self._rng.choice(free)

    def __repr__(self):
        return (f"Game(score={self.score()}, head={tuple(self.head)}, dir={self.dir.name}, "
                f"food={self.food if self.food is None else tuple(self.food)}, "
                f"total_steps={self.total_steps}, is_dead={self.is_dead})")
