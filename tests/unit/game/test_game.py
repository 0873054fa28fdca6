"""
Unit tests for the snake game and its directions.

Tests cover the initial state, movement, growth, death by wall, by the body
and by a full board, and reproducibility of seeded games.
"""

import pytest

from evosnake.game       import Direction, Game, NUM_ACTIONS, Point
from evosnake.run.config import Config


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def board_config():
    """A 10x10 board."""
    return Config().replace(grid_width=10, grid_height=10)


@pytest.fixture
def game(board_config):
    """A game with the food placed out of the way of the tests."""
    game = Game(board_config, seed=1)
    game.food = Point(0, 0)
    return game


# ============================================================================
# Test Direction
# ============================================================================

class TestDirection:
    """Test the four directions and their encodings."""

    def test_order(self):
        assert [d.name for d in Direction] == ["LEFT", "RIGHT", "BOTTOM", "TOP"]
        assert NUM_ACTIONS == 4

    @pytest.mark.parametrize("direction, vector", [
        (Direction.LEFT,   (-1,  0)),
        (Direction.RIGHT,  ( 1,  0)),
        (Direction.BOTTOM, ( 0,  1)),
        (Direction.TOP,    ( 0, -1)),
    ])
    def test_vector(self, direction, vector):
        assert direction.vector == vector
        assert Direction.from_vector(*vector) == direction

    def test_opposite(self):
        for direction in Direction:
            assert direction.opposite() != direction
            assert direction.opposite().opposite() == direction
            dx, dy = direction.vector
            assert direction.opposite().vector == (-dx, -dy)

    def test_one_hot(self):
        assert Direction.BOTTOM.one_hot() == [0.0, 0.0, 1.0, 0.0]
        for direction in Direction:
            assert sum(direction.one_hot()) == 1.0

    def test_from_vector_defaults_to_top(self):
        assert Direction.from_vector(0, 0) == Direction.TOP
        assert Direction.from_vector(2, 5) == Direction.TOP

    def test_point_step(self):
        assert Point(3, 4).step(-1, 1) == Point(2, 5)


# ============================================================================
# Test Initial State
# ============================================================================

class TestInitialState:
    """Test a freshly created game."""

    def test_single_segment_at_centre(self, board_config):
        game = Game(board_config, seed=3)

        assert game.head == Point(5, 5)
        assert game.body == [Point(5, 5)]
        assert game.score() == 1

    def test_counters(self, board_config):
        game = Game(board_config, seed=3)

        assert not game.is_dead
        assert game.no_food_steps == 0
        assert game.total_steps   == 0

    def test_food_on_free_cell(self, board_config):
        for seed in range(20):
            game = Game(board_config, seed=seed)
            assert game.food not in game.body
            assert not game.is_wall(game.food)

    def test_seeded_games_are_identical(self, board_config):
        first, second = Game(board_config, seed=7), Game(board_config, seed=7)
        assert first.dir  == second.dir
        assert first.food == second.food

    def test_games_use_private_generator(self, board_config):
        """Test that games do not depend on the global 'random' state."""
        import random
        random.seed(0)
        first = Game(board_config, seed=7)
        random.seed(1)
        second = Game(board_config, seed=7)
        assert first.food == second.food


# ============================================================================
# Test Movement
# ============================================================================

class TestMovement:
    """Test ticks that do not end the game."""

    def test_move(self, game):
        game.update(Direction.LEFT)

        assert game.head == Point(4, 5)
        assert game.body == [Point(4, 5)]
        assert game.dir  == Direction.LEFT
        assert game.total_steps   == 1
        assert game.no_food_steps == 1

    def test_single_segment_can_reverse(self, game):
        game.dir = Direction.LEFT
        game.update(Direction.RIGHT)
        assert game.head == Point(6, 5)
        assert not game.is_dead

    def test_reverse_ignored_with_body(self, game):
        game.body = [Point(5, 5), Point(6, 5)]
        game.dir  = Direction.LEFT

        game.update(Direction.RIGHT)

        assert not game.is_dead
        assert game.head == Point(4, 5)
        assert game.dir  == Direction.LEFT

    def test_body_follows_head(self, game):
        game.body = [Point(5, 5), Point(5, 6), Point(5, 7)]
        game.dir  = Direction.TOP

        game.update(Direction.RIGHT)

        assert game.body == [Point(6, 5), Point(5, 5), Point(5, 6)]

    def test_eating(self, game):
        game.food = Point(4, 5)

        game.update(Direction.LEFT)

        assert game.body == [Point(4, 5), Point(5, 5)]
        assert game.score() == 2
        assert game.no_food_steps == 0
        assert game.total_steps   == 1
        assert game.food not in game.body

    def test_moving_onto_vacated_tail(self, game):
        """Test that the cell left by the tail in the same tick is free."""
        game.body = [Point(5, 5), Point(6, 5), Point(6, 6), Point(5, 6)]
        game.dir  = Direction.LEFT

        game.update(Direction.BOTTOM)

        assert not game.is_dead
        assert game.head == Point(5, 6)


# ============================================================================
# Test Death
# ============================================================================

class TestDeath:
    """Test the ways a game ends."""

    def test_wall(self, game):
        for _ in range(5):
            game.update(Direction.LEFT)
        assert game.head == Point(0, 5)
        assert not game.is_dead

        game.update(Direction.LEFT)

        assert game.is_dead
        assert game.head == Point(0, 5)
        assert game.total_steps == 6

    def test_body(self, game):
        game.body = [Point(2, 2), Point(2, 3), Point(3, 3), Point(3, 2), Point(3, 1)]
        game.head = Point(2, 2)
        game.dir  = Direction.TOP

        game.update(Direction.RIGHT)

        assert game.is_dead
        assert len(game.body) == 5

    def test_growing_into_tail(self, game):
        """Test that the tail is an obstacle when the snake grows in the same tick."""
        game.body = [Point(5, 5), Point(6, 5), Point(6, 6), Point(5, 6)]
        game.dir  = Direction.LEFT
        game.food = Point(5, 6)

        game.update(Direction.BOTTOM)

        assert game.is_dead

    def test_update_after_death_is_no_op(self, game):
        game.is_dead = True
        game.update(Direction.LEFT)

        assert game.total_steps == 0
        assert game.head == Point(5, 5)

    def test_full_board(self):
        """Test that filling every cell ends the game."""
        config = Config().replace(grid_width=2, grid_height=1)
        game   = Game(config, seed=0)
        assert game.head == Point(1, 0)
        assert game.food == Point(0, 0)

        game.update(Direction.LEFT)

        assert game.score() == 2
        assert game.is_dead
        assert game.food is None


# ============================================================================
# Test Queries
# ============================================================================

class TestQueries:
    """Test wall and body queries used by the perception."""

    @pytest.mark.parametrize("point, expected", [
        (Point(0, 0),   False),
        (Point(9, 9),   False),
        (Point(-1, 5),  True),
        (Point(10, 5),  True),
        (Point(5, -1),  True),
        (Point(5, 10),  True),
    ])
    def test_is_wall(self, game, point, expected):
        assert game.is_wall(point) == expected

    def test_head_is_not_body(self, game):
        game.body = [Point(5, 5), Point(6, 5)]
        assert not game.is_snake_body(Point(5, 5))
        assert game.is_snake_body(Point(6, 5))
        assert not game.is_snake_body(Point(7, 5))
