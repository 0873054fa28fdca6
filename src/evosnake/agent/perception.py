"""
Evosnake Perception Module

Translation between the state of a game and the inputs/outputs of a network.

The perception vector has 24 entries:
    - for each of 8 compass directions, cast a ray from the head and record
      1/distance to the first obstacle (wall or body) and whether the food
      lies on the ray before that obstacle (16 values);
    - the direction of the head, one-hot (4 values);
    - the direction of the tail, one-hot (4 values).

The network's 4 outputs are decoded into the direction with the largest value.

Functions:
    perception_vector(game): Encode the game state for the network
    cast_ray(game, start, step): Distance signal and food flag along one ray
    tail_direction(game): The direction the tail is moving in
    decode_action(outputs): Pick the action with the largest output
"""

import math
from typing import Sequence, TYPE_CHECKING

from evosnake.errors import ConfigurationError
from evosnake.game   import NUM_ACTIONS, Direction, Point
if TYPE_CHECKING:
    from evosnake.game import Game

# Left, right, bottom, top, then the four diagonals
EIGHT_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1,  0), ( 1,  0), ( 0,  1), ( 0, -1),
    (-1, -1), ( 1, -1), (-1,  1), ( 1,  1),
)

# Rays stop after this many steps even if no obstacle was met
MAX_RAY_STEPS = 1000

PERCEPTION_SIZE = 2 * len(EIGHT_DIRECTIONS) + 2 * NUM_ACTIONS

def cast_ray(game: 'Game', start: Point, step: tuple[int, int]) -> tuple[float, bool]:
    """
    Walk from 'start' in the direction 'step' until a wall or the snake body is met.

    Parameters:
        game:  the game being observed
        start: the first cell of the ray (the head)
        step:  the (dx, dy) increment between two cells of the ray

    Returns:
        a tuple (1/distance, food seen), where distance is the number of
        free cells traversed (at least 1)
    """
    food  = False
    point = start
    dist  = 0

    while not (game.is_wall(point) or game.is_snake_body(point)):
        if point == game.food:
            food = True
        point = point.step(*step)

        dist += 1
        if dist > MAX_RAY_STEPS:
            break

    return 1.0 / max(dist, 1), food

def tail_direction(game: 'Game') -> Direction:
    """
    The direction of the tail, from the offset between the last two body segments.
    A snake with a single segment uses the direction of its head.
    """
    if len(game.body) < 2:
        return game.dir

    tail, before_tail = game.body[-1], game.body[-2]
    return Direction.from_vector(before_tail.x - tail.x, before_tail.y - tail.y)

def perception_vector(game: 'Game') -> list[float]:
    """
    Encode the state of the game into the 24 network inputs.
    """
    vision = []
    for step in EIGHT_DIRECTIONS:
        solid, food = cast_ray(game, game.head, step)
        vision.append(solid)
        vision.append(1.0 if food else 0.0)

    return vision + game.dir.one_hot() + tail_direction(game).one_hot()

def decode_action(outputs: Sequence[float]) -> Direction:
    """
    Choose the direction whose output is the largest.

    Outputs are read in the order LEFT, RIGHT, BOTTOM, TOP; when several
    outputs share the maximum, the first of them in this order wins.

    Raises:
        ConfigurationError: if there are not exactly 4 outputs
        FloatingPointError: if an output is NaN
    """
    if len(outputs) != NUM_ACTIONS:
        raise ConfigurationError(f"Expected {NUM_ACTIONS} network outputs, got {len(outputs)}")
    if any(math.isnan(value) for value in outputs):
        raise FloatingPointError(f"Network produced NaN outputs: {list(outputs)}")

    best = max(range(NUM_ACTIONS), key=lambda i: outputs[i])
    return Direction(best)
