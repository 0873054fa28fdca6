import configparser
import os
from typing import Any

from evosnake.errors import ConfigurationError

class Config:
    """
    Configuration parameters for a snake evolution run.

    A Config is built once, either from an INI file or from the in-code defaults,
    validated, and then frozen: it is passed explicitly to every Simulation,
    Population, Agent and Game constructor and never changes afterwards.
    To derive a modified configuration use 'replace(**overrides)'.
    """

    # Attributes whose raw value (string or sequence) is parsed on assignment
    _PARSERS = {
        'layer_sizes'      : '_parse_layer_sizes',
        'mutation_schedule': '_parse_mutation_schedule',
    }

    @staticmethod
    def _parse_layer_sizes(raw_sizes) -> tuple[int, ...]:
        """
        Parse layer_sizes from a comma-separated string to a tuple of ints.

        Parameters:
            raw_sizes: Either a comma-separated string ("24, 16, 4") or a sequence of ints

        Returns:
            Tuple of layer sizes, input width first
        """
        if isinstance(raw_sizes, str):
            try:
                return tuple(int(size.strip()) for size in raw_sizes.split(','))
            except ValueError:
                raise ConfigurationError(f"Invalid layer_sizes '{raw_sizes}'") from None
        return tuple(raw_sizes)

    @staticmethod
    def _parse_mutation_schedule(raw_schedule) -> tuple[tuple[int, float, float], ...]:
        """
        Parse mutation_schedule into a tuple of (min_score, rate, magnitude) entries.

        The string form is a comma-separated list of 'score:rate:magnitude' triplets,
        for example "0:0.1:0.2, 10:0.05:0.1". Entries are sorted by score.

        Parameters:
            raw_schedule: Either the string form or a sequence of 3-tuples

        Returns:
            Tuple of (min_score, rate, magnitude), sorted by ascending min_score
        """
        if isinstance(raw_schedule, str):
            entries = []
            for item in raw_schedule.split(','):
                fields = item.strip().split(':')
                if len(fields) != 3:
                    raise ConfigurationError(f"Invalid mutation_schedule entry '{item.strip()}'")
                try:
                    entries.append((int(fields[0]), float(fields[1]), float(fields[2])))
                except ValueError:
                    raise ConfigurationError(f"Invalid mutation_schedule entry '{item.strip()}'") from None
        else:
            entries = [(int(score), float(rate), float(magnitude)) for score, rate, magnitude in raw_schedule]
        return tuple(sorted(entries))

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or from the built-in defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, every parameter takes its default value.
        """

        if config_file is not None and not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        if config_file is not None:
            parser.read(config_file)

        # Helper function to safely parse values, falling back to the default
        # when the section or the key is absent
        def get_value(section, key, value_type, default):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default
            except ValueError:
                raise ConfigurationError(f"Invalid value for '{key}' in section [{section}]") from None

        # [NETWORK]

        # The size of each network layer, input layer first.
        # The input width must match the perception vector (24 values)
        # and the output width the number of actions (4 directions).
        self.layer_sizes = get_value('NETWORK', 'layer_sizes', str, "24, 16, 4")

        # [POPULATION]

        # The number of agents in each generation.
        self.population_size = get_value('POPULATION', 'population_size', int, 500)

        # The number of worker threads advancing agents during a tick.
        # Use -1 for as many threads as CPU cores.
        self.num_threads = get_value('POPULATION', 'num_threads', int, 4)

        # The fraction of the next generation made of unchanged copies
        # of the best brains of the current generation.
        self.elite_fraction = get_value('POPULATION', 'elite_fraction', float, 0.05)

        # The fraction of the next generation made of mutated copies
        # of the best brains of the current generation.
        self.mutated_elite_fraction = get_value('POPULATION', 'mutated_elite_fraction', float, 0.1)

        # The fraction of the next generation made of brand new random brains.
        self.random_fraction = get_value('POPULATION', 'random_fraction', float, 0.05)

        # [MUTATION]

        # The probability that any single weight or bias is perturbed.
        self.mutation_rate = get_value('MUTATION', 'mutation_rate', float, 0.1)

        # Perturbations are drawn uniformly from [-magnitude, +magnitude].
        self.mutation_magnitude = get_value('MUTATION', 'mutation_magnitude', float, 0.2)

        # Whether the population adapts rate and magnitude to its progress,
        # following 'mutation_schedule'.
        self.adaptive_mutation = get_value('MUTATION', 'adaptive_mutation', bool, True)

        # Comma-separated 'score:rate:magnitude' triplets. The entry with the
        # highest score not exceeding the generation's best score applies.
        self.mutation_schedule = get_value('MUTATION', 'mutation_schedule', str,
                                           "0:0.1:0.2, 10:0.08:0.15, 20:0.05:0.1, 40:0.02:0.05")

        # [GAME]

        # The size of the board; cells outside of it are walls.
        self.grid_width  = get_value('GAME', 'grid_width' , int, 20)
        self.grid_height = get_value('GAME', 'grid_height', int, 20)

        # The base number of steps an agent may take without eating before
        # it is killed. It is scaled up as the snake grows.
        self.step_budget = get_value('GAME', 'step_budget', int, 100)

        # [PERSISTENCE]

        # Whether an improved champion is written to 'save_path'.
        self.save_best_net = get_value('PERSISTENCE', 'save_best_net', bool, False)
        self.save_path     = get_value('PERSISTENCE', 'save_path', str, os.path.join("data", "best_net.json"))

        # Whether the initial population is seeded from the champion at 'load_path'.
        self.load_best_net = get_value('PERSISTENCE', 'load_best_net', bool, False)
        self.load_path     = get_value('PERSISTENCE', 'load_path', str, os.path.join("data", "best_net.json"))

        # Mutation applied to a loaded champion before it joins a population.
        # A rate of 0.0 leaves every reseeded brain identical to the champion.
        self.reseed_mutation_rate      = get_value('PERSISTENCE', 'reseed_mutation_rate'     , float, 0.0)
        self.reseed_mutation_magnitude = get_value('PERSISTENCE', 'reseed_mutation_magnitude', float, 0.1)

        # [SIMULATION]

        # The number of generations after which 'Simulation.run()' returns.
        # Use "None" to run until interrupted.
        self.max_generations = get_value('SIMULATION', 'max_generations', int, None)

        # Minimum delay between two redraws of the reporter.
        self.draw_interval_ms = get_value('SIMULATION', 'draw_interval_ms', int, 15)

        # Seed for the random number generators. Use "None" for a random run.
        self.seed = get_value('SIMULATION', 'seed', int, None)

        self._validate()
        self._freeze()

    def _validate(self) -> None:
        """
        Check every parameter, raising ConfigurationError on the first invalid one.
        """
        # Import here to avoid circular import
        from evosnake.agent.perception import PERCEPTION_SIZE
        from evosnake.game             import NUM_ACTIONS

        sizes = self.layer_sizes
        if len(sizes) < 2:
            raise ConfigurationError("layer_sizes needs at least 2 layers")
        if any(size <= 0 for size in sizes):
            raise ConfigurationError("layer_sizes does not allow empty layers")
        if sizes[0] != PERCEPTION_SIZE:
            raise ConfigurationError(f"The input layer must have {PERCEPTION_SIZE} nodes, got {sizes[0]}")
        if sizes[-1] != NUM_ACTIONS:
            raise ConfigurationError(f"The output layer must have {NUM_ACTIONS} nodes, got {sizes[-1]}")

        if self.population_size is None or self.population_size < 1:
            raise ConfigurationError("population_size must be at least 1")
        if self.num_threads is None or (self.num_threads < 1 and self.num_threads != -1):
            raise ConfigurationError("num_threads must be a positive number or -1")

        fractions = (self.elite_fraction, self.mutated_elite_fraction, self.random_fraction)
        if any(not 0.0 <= f <= 1.0 for f in fractions):
            raise ConfigurationError("population fractions must be between 0 and 1")
        if sum(fractions) > 1.0:
            raise ConfigurationError("population fractions must not add up to more than 1")

        for rate in [self.mutation_rate, self.reseed_mutation_rate] + [r for _, r, _ in self.mutation_schedule]:
            if not 0.0 <= rate <= 1.0:
                raise ConfigurationError(f"mutation rate {rate} is not a probability")
        for magnitude in [self.mutation_magnitude, self.reseed_mutation_magnitude] + [m for _, _, m in self.mutation_schedule]:
            if magnitude < 0.0:
                raise ConfigurationError(f"mutation magnitude {magnitude} is negative")
        if self.adaptive_mutation and not self.mutation_schedule:
            raise ConfigurationError("adaptive_mutation requires a non-empty mutation_schedule")

        if self.grid_width < 1 or self.grid_height < 1 or self.grid_width * self.grid_height < 2:
            raise ConfigurationError("the board needs room for the snake and the food")
        if self.step_budget < 1:
            raise ConfigurationError("step_budget must be at least 1")
        if self.max_generations is not None and self.max_generations < 0:
            raise ConfigurationError("max_generations must not be negative")

    def _freeze(self) -> None:
        object.__setattr__(self, '_frozen', True)

    def replace(self, **overrides: Any) -> 'Config':
        """
        Return a validated copy of this configuration with some parameters changed.

        Parameters:
            overrides: new values, by parameter name (e.g. population_size=10)

        Returns:
            A new, frozen Config
        """
        clone = Config.__new__(Config)
        clone.__dict__.update({k: v for k, v in self.__dict__.items() if k != '_frozen'})

        for name, value in overrides.items():
            if name not in clone.__dict__:
                raise AttributeError(f"Unknown configuration parameter '{name}'")
            setattr(clone, name, value)

        clone._validate()
        clone._freeze()
        return clone

    def __setattr__(self, name, value):
        """
        Override 'setattr' to reject changes once the configuration is frozen,
        and to parse the string forms of 'layer_sizes' and 'mutation_schedule'.
        """
        if getattr(self, '_frozen', False):
            raise AttributeError(f"Config is frozen, use replace({name}=...) to derive a modified copy")
        if name in self._PARSERS:
            value = getattr(self, self._PARSERS[name])(value)
        super().__setattr__(name, value)

    def __repr__(self):
        params = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items() if k != '_frozen')
        return f"Config({params})"
