"""Pytest configuration and shared fixtures."""

import random
import pytest
import numpy as np
from itertools import count

from evosnake.agent      import Agent
from evosnake.run.config import Config


@pytest.fixture(autouse=True)
def reset_random_state():
    """Seed the global generators and restart agent IDs before every test."""
    np.random.seed(42)
    random.seed(42)
    Agent._id_generator = count(0)
    yield


@pytest.fixture
def small_config():
    """A configuration small enough for whole generations to run quickly."""
    return Config().replace(population_size = 10,
                            num_threads     = 2,
                            grid_width      = 10,
                            grid_height     = 10,
                            step_budget     = 20)


@pytest.fixture
def sample_network():
    """A random network with the default agent topology."""
    from evosnake.network import Network
    return Network([24, 16, 4])
