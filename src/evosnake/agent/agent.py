"""
Evosnake Agent Module

This module implements the Agent class: one network (the "brain") playing one
snake game. The agent is the unit of fitness evaluation.

Classes:
    Agent: A network coupled with the game it plays
"""

import functools
import numpy as np
from itertools import count
from typing    import TYPE_CHECKING

from evosnake.agent.perception import decode_action, perception_vector
from evosnake.game             import Direction, Game
from evosnake.network          import Network, load_network
if TYPE_CHECKING:
    from evosnake.run.config import Config

@functools.total_ordering
class Agent:
    """
    An agent playing the snake game, driven by its own neural network.

    Every tick the agent encodes the game state into the network inputs, asks
    the network for an action and applies it to the game. The agent starves
    (its game is forced to end) when it goes too long without eating.

    The agent exclusively owns both its game and its brain: two agents never
    share a Network instance, so agents can be advanced on different threads.

    Agents are ordered by fitness only: two agents with the same fitness compare
    equal, however differently they played.

    Public Attributes:
        ID:    Unique identifier for this agent
        game:  The game this agent is playing
        brain: The network choosing the agent's moves

    Public Methods:
        update():           Play one tick, returns whether the game goes on
        fitness():          Score the agent from its game statistics
        step_limit():       Ticks allowed without eating, given the current score
        get_brain_output(): The action chosen by the brain for the current state
        get_brain_input():  The perception vector for the current state
        clone():            A new agent with a copy of this brain and a fresh game
        mate(other, ...):   A new agent whose brain is a mutated crossover of both brains
    """

    _id_generator = count(0)

    def __init__(self,
                 config: 'Config',
                 brain : Network | None = None,
                 load  : bool           = False,
                 seed  : int | None     = None):
        """
        Create an agent with a brand-new game.

        Parameters:
            config: Stores configuration parameters
            brain:  The network for this agent; the agent takes ownership of it.
                    If None, the champion is loaded (when 'load' is True) or a
                    random network is created.
            load:   Whether to reseed the brain from the persisted champion
            seed:   Seed for the game; if None, drawn from numpy's global generator
        """
        self.ID     : int      = next(Agent._id_generator)
        self._config: 'Config' = config

        if brain is None:
            if load:
                brain = Agent.reseed_brain(load_network(config), config)
            else:
                brain = Network(config.layer_sizes)
        self.brain: Network = brain

        if seed is None:
            seed = int(np.random.randint(0, 2**31 - 1))
        self.game: Game = Game(config, seed)

    @staticmethod
    def reseed_brain(champion: Network, config: 'Config') -> Network:
        """
        Derive a new brain from a saved champion: a copy of it, mutated with
        the reseed rate and magnitude. With the default rate of 0.0, the copy
        is identical to the champion.
        """
        brain = champion.copy()
        brain.mutate(config.reseed_mutation_rate, config.reseed_mutation_magnitude)
        return brain

    def update(self) -> bool:
        """
        Play one tick of the game.

        Returns:
            True if the game is still running after this tick; False if it was
            already over, or ended during this tick (collision or starvation)
        """
        if self.game.is_dead:
            return False

        self.game.update(self.get_brain_output())

        # Limit the number of steps the snake can take without eating
        if self.game.no_food_steps >= self.step_limit():
            self.game.is_dead = True

        return not self.game.is_dead

    def step_limit(self) -> int:
        """
        The number of consecutive ticks without food after which the agent starves.
        Longer snakes need more room to manoeuvre and get a larger budget.
        """
        base  = self._config.step_budget
        score = self.game.score()
        if score > 30:
            return base * 6
        if score > 20:
            return base * 3
        if score > 5:
            return base * 2
        return base

    def fitness(self) -> float:
        """
        The fitness of the agent, from its length and the ticks it survived.

        A snake that never ate gets the minimum fitness of 1. While short
        (fewer than 5 segments) growth is rewarded exponentially, afterwards
        cubically; both are scaled by the number of ticks survived.
        """
        score = self.game.score()
        if score <= 1:
            return 1.0

        steps = self.game.total_steps * 0.1
        if score < 5:
            return 2.0 ** score * score * steps
        return float(score) ** 3 * steps

    def get_brain_output(self) -> Direction:
        return decode_action(self.brain.predict(self.get_brain_input()))

    def get_brain_input(self) -> list[float]:
        return perception_vector(self.game)

    def clone(self) -> 'Agent':
        """
        Create a new Agent with a copy of this brain and a fresh game.
        """
        return Agent(self._config, self.brain.copy())

    def mate(self, other: 'Agent', rate: float, magnitude: float) -> 'Agent':
        """
        Create a new Agent by mating with another Agent.

        Mating involves the following steps:
         - create a new brain, via crossover between the brains of the two parents
         - mutate the new brain
         - create a new Agent, with a fresh game, around the new brain

        Parameters:
            other:     the Agent with whom this Agent is mating
            rate:      mutation rate applied to the offspring's brain
            magnitude: mutation magnitude applied to the offspring's brain

        Returns:
            the offspring resulting from the mating process
        """
        brain = self.brain.merge(other.brain)
        brain.mutate(rate, magnitude)
        return Agent(self._config, brain)

    def __eq__(self, other):
        if not isinstance(other, Agent):
            return NotImplemented
        return self.fitness() == other.fitness()

    def __lt__(self, other):
        if not isinstance(other, Agent):
            return NotImplemented
        return self.fitness() < other.fitness()

    __hash__ = None

    def __str__(self):
        return f"ID={self.ID}, score={self.game.score()}, fitness={self.fitness():.4f}\n{self.brain}"

    def __repr__(self):
        return f"Agent(ID={self.ID}, game={self.game!r})"
