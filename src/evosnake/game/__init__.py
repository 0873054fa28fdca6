"""
Evosnake Game Package

The snake game the agents learn to play. The evolution engine only relies on
the interface of 'Game' (update, is_dead, head, body, food, dir, step counters,
score, is_wall, is_snake_body), so any implementation of it can be plugged in.

Modules:
    direction: Point, Direction and NUM_ACTIONS
    game:      Game, a minimal grid snake game

Exported:
    Point:       An (x, y) cell of the board
    Direction:   The four movement directions, in one-hot order
    NUM_ACTIONS: Number of directions (the width of a network's output layer)
    Game:        The state of one game
"""

from evosnake.game.direction import NUM_ACTIONS, Direction, Point
from evosnake.game.game      import Game

__all__ = ['Direction',
           'Game',
           'NUM_ACTIONS',
           'Point']
