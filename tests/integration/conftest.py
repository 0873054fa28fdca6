"""
Shared fixtures for integration tests.
"""

import pytest

from evosnake.run.config import Config


@pytest.fixture
def evolution_config(tmp_path):
    """A small but complete evolution, persisting its champion under tmp_path."""
    return Config().replace(population_size = 20,
                            num_threads     = 4,
                            grid_width      = 12,
                            grid_height     = 12,
                            step_budget     = 30,
                            save_best_net   = True,
                            save_path       = str(tmp_path / "best_net.json"),
                            load_path       = str(tmp_path / "best_net.json"))
