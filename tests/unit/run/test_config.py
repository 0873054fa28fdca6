"""
Unit tests for Config class.
"""

import pytest
import os
from evosnake.errors     import ConfigurationError
from evosnake.run.config import Config


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def test_config_dir():
    """Return the directory containing test configuration files."""
    return os.path.join(os.path.dirname(__file__), 'test_configs')


@pytest.fixture
def full_config(test_config_dir):
    return Config(os.path.join(test_config_dir, 'full.ini'))


# ============================================================================
# Test Config Initialization
# ============================================================================

class TestConfigInit:
    """Test Config initialization."""

    def test_init_without_file_uses_defaults(self):
        """Test that Config() without file takes every built-in default."""
        config = Config()

        assert config.layer_sizes     == (24, 16, 4)
        assert config.population_size == 500
        assert config.num_threads     == 4
        assert config.grid_width      == 20
        assert config.grid_height     == 20
        assert config.step_budget     == 100
        assert config.save_best_net   is False
        assert config.load_best_net   is False
        assert config.max_generations is None
        assert config.seed            is None

    def test_default_paths(self):
        config = Config()
        assert config.save_path == os.path.join("data", "best_net.json")
        assert config.load_path == os.path.join("data", "best_net.json")

    def test_init_with_nonexistent_file_raises_error(self):
        """Test that Config with nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file .* not found"):
            Config('nonexistent_file.ini')

    def test_init_with_minimal_config(self, test_config_dir):
        """Test that keys missing from the file take their defaults."""
        config = Config(os.path.join(test_config_dir, 'minimal.ini'))

        assert config.population_size == 100
        assert config.layer_sizes     == (24, 16, 4)
        assert config.mutation_rate   == 0.1

    def test_example_config_loads(self):
        """Test that the shipped example configuration is valid."""
        root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(__file__))))
        config = Config(os.path.join(root, 'examples', 'configs', 'config_snake.ini'))
        assert config.save_best_net is True
        assert config.population_size == 500


# ============================================================================
# Test Config Sections
# ============================================================================

class TestConfigSections:
    """Test parsing of every INI section."""

    def test_network(self, full_config):
        assert full_config.layer_sizes == (24, 32, 12, 4)

    def test_population(self, full_config):
        assert full_config.population_size        == 200
        assert full_config.num_threads            == -1
        assert full_config.elite_fraction         == 0.1
        assert full_config.mutated_elite_fraction == 0.2
        assert full_config.random_fraction        == 0.1

    def test_mutation(self, full_config):
        assert full_config.mutation_rate      == 0.05
        assert full_config.mutation_magnitude == 0.3
        assert full_config.adaptive_mutation  is False

    def test_mutation_schedule_sorted(self, full_config):
        """Test that schedule entries are parsed and sorted by score."""
        assert full_config.mutation_schedule == ((0, 0.2, 0.5), (20, 0.01, 0.02))

    def test_game(self, full_config):
        assert full_config.grid_width  == 30
        assert full_config.grid_height == 15
        assert full_config.step_budget == 80

    def test_persistence(self, full_config):
        assert full_config.save_best_net             is True
        assert full_config.save_path                 == "out/champion.json"
        assert full_config.load_best_net             is True
        assert full_config.load_path                 == "in/champion.json"
        assert full_config.reseed_mutation_rate      == 0.02
        assert full_config.reseed_mutation_magnitude == 0.05

    def test_simulation(self, full_config):
        assert full_config.max_generations  == 250
        assert full_config.draw_interval_ms == 40
        assert full_config.seed             == 1234

    def test_invalid_value(self, test_config_dir):
        with pytest.raises(ConfigurationError, match="population_size"):
            Config(os.path.join(test_config_dir, 'bad_value.ini'))

    def test_invalid_file_topology(self, test_config_dir):
        with pytest.raises(ConfigurationError, match="output layer must have 4 nodes"):
            Config(os.path.join(test_config_dir, 'bad_layers.ini'))


# ============================================================================
# Test Config Validation
# ============================================================================

class TestConfigValidation:
    """Test that inconsistent parameters are rejected."""

    @pytest.mark.parametrize("overrides, message", [
        ({'layer_sizes': (24,)},               "at least 2 layers"),
        ({'layer_sizes': (24, 0, 4)},          "empty layers"),
        ({'layer_sizes': (23, 16, 4)},         "input layer must have 24 nodes"),
        ({'layer_sizes': "24, 16, 3"},         "output layer must have 4 nodes"),
        ({'population_size': 0},               "population_size"),
        ({'num_threads': 0},                   "num_threads"),
        ({'num_threads': -2},                  "num_threads"),
        ({'elite_fraction': 1.5},              "between 0 and 1"),
        ({'elite_fraction': 0.6,
          'mutated_elite_fraction': 0.6},      "add up to more than 1"),
        ({'mutation_rate': 1.2},               "not a probability"),
        ({'reseed_mutation_rate': -0.1},       "not a probability"),
        ({'mutation_magnitude': -0.1},         "negative"),
        ({'mutation_schedule': "0:2.0:0.1"},   "not a probability"),
        ({'mutation_schedule': ()},            "non-empty mutation_schedule"),
        ({'grid_width': 0},                    "room for the snake"),
        ({'grid_width': 1, 'grid_height': 1},  "room for the snake"),
        ({'step_budget': 0},                   "step_budget"),
        ({'max_generations': -1},              "max_generations"),
    ])
    def test_rejected(self, overrides, message):
        with pytest.raises(ConfigurationError, match=message):
            Config().replace(**overrides)

    @pytest.mark.parametrize("raw", ["24, x, 4", "24;16;4"])
    def test_unparsable_layer_sizes(self, raw):
        with pytest.raises(ConfigurationError, match="Invalid layer_sizes"):
            Config().replace(layer_sizes=raw)

    @pytest.mark.parametrize("raw", ["0:0.1", "0:0.1:0.2:0.3", "a:0.1:0.2"])
    def test_unparsable_mutation_schedule(self, raw):
        with pytest.raises(ConfigurationError, match="Invalid mutation_schedule entry"):
            Config().replace(mutation_schedule=raw)

    def test_empty_schedule_allowed_without_adaptation(self):
        config = Config().replace(adaptive_mutation=False, mutation_schedule=())
        assert config.mutation_schedule == ()

    def test_all_cores(self):
        assert Config().replace(num_threads=-1).num_threads == -1


# ============================================================================
# Test Immutability
# ============================================================================

class TestConfigImmutability:
    """Test that a Config never changes once built."""

    def test_frozen(self):
        config = Config()
        with pytest.raises(AttributeError, match="frozen"):
            config.population_size = 10

    def test_replace_returns_new_config(self):
        config  = Config()
        derived = config.replace(population_size=10, layer_sizes="24, 8, 4")

        assert derived.population_size == 10
        assert derived.layer_sizes     == (24, 8, 4)
        assert config.population_size  == 500
        assert config.layer_sizes      == (24, 16, 4)

    def test_replaced_config_is_frozen(self):
        derived = Config().replace(population_size=10)
        with pytest.raises(AttributeError):
            derived.population_size = 20

    def test_replace_unknown_parameter(self):
        with pytest.raises(AttributeError, match="Unknown configuration parameter 'pop_size'"):
            Config().replace(pop_size=10)

    def test_replace_parses_sequences(self):
        config = Config().replace(mutation_schedule=[(10, 0.1, 0.1), (0, 0.2, 0.2)])
        assert config.mutation_schedule == ((0, 0.2, 0.2), (10, 0.1, 0.1))

    def test_repr(self):
        assert "population_size=500" in repr(Config())
