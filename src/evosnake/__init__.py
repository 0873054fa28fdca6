"""
Evosnake - neuro-evolution of snake-playing neural networks.

This package evolves populations of small feed-forward neural networks that
play a grid snake game, using a generational genetic algorithm: no gradients,
only selection, crossover and mutation.

Main components:
- activations: Activation functions (ReLU)
- network:     Fixed-topology networks, their genetic operators and persistence
- game:        The snake game the agents play
- agent:       Perception encoding, action decoding, fitness
- pool:        Population management and reproduction
- run:         Configuration, simulation loop and console reporting

Example:
    >>> from evosnake import Config, Simulation
    >>> config = Config("examples/configs/config_snake.ini")
    >>> simulation = Simulation(config)
    >>> simulation.run(max_generations=50)
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evosnake.errors         import ConfigurationError, EvosnakeError, PersistenceError
from evosnake.run.config     import Config
from evosnake.run.simulation import GenerationSummary, Simulation
from evosnake.run.reporter   import ConsoleReporter
from evosnake.network        import Network, load_network, save_network
from evosnake.game           import Direction, Game
from evosnake.agent          import Agent
from evosnake.pool           import Population

__all__ = [
    "Agent",
    "Config",
    "ConfigurationError",
    "ConsoleReporter",
    "Direction",
    "EvosnakeError",
    "Game",
    "GenerationSummary",
    "Network",
    "PersistenceError",
    "Population",
    "Simulation",
    "load_network",
    "save_network",
]
