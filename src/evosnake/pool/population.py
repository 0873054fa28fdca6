"""
Evosnake Population Module

This module implements the Population class, the generational engine of the
evolution. A population owns a fixed number of agents which play their games
simultaneously; when every game is over, the agents are ranked by fitness and
replaced wholesale by the next generation.

Classes:
    Population: A generation of agents, advanced in parallel and bred by fitness
"""

import logging
import numpy as np
from joblib import Parallel, delayed
from typing import TYPE_CHECKING

from evosnake.agent   import Agent
from evosnake.network import Network, load_network
if TYPE_CHECKING:
    from evosnake.run.config import Config

logger = logging.getLogger(__name__)

class Population:
    """
    A population of agents evolving through generations.

    During a generation, 'update()' advances every live agent by one tick on a
    pool of worker threads and reports how many agents are still playing.
    Each agent only touches its own game and brain, so the ticks of different
    agents are independent of each other and of the scheduling order.

    Once no agent is left, 'get_gen_summary()' reports the best agent and
    'reset()' breeds the next generation. The next generation is made of:
        - elites:         unchanged copies of the best brains
        - mutated elites: mutated copies of the best brains
        - immigrants:     brand-new random brains
        - offspring:      crossovers of two parents picked with probability
                          proportional to their fitness, then mutated
    The fractions of the first three groups are set in the configuration;
    offspring fill the rest, so the population size never changes.

    The mutation rate and magnitude used for breeding are adapted to the best
    score of the generation, following the configured mutation schedule.

    Public Attributes:
        agents:             List of all Agent objects in the current generation
        mutation_rate:      Probability that any weight or bias of an offspring is perturbed
        mutation_magnitude: Half-width of the perturbation interval

    Public Methods:
        update():            Advance every live agent by one tick, return the number alive
        get_gen_summary():   The best brain of the generation and its score
        generation_stats():  Summary statistics of the current generation
        reset():             Replace the current generation with the next one
        close():             Release the worker threads
    """

    def __init__(self, config: 'Config'):
        """
        Create the first generation. Brains are random, unless the configuration
        asks to reseed the population from the persisted champion.

        Parameters:
            config: Stores configuration parameters
        """
        self._config: 'Config' = config

        self.mutation_rate     : float = config.mutation_rate
        self.mutation_magnitude: float = config.mutation_magnitude

        self._parallel: Parallel | None = None

        # The champion is read once and each agent gets its own reseeded copy
        if config.load_best_net:
            champion = load_network(config)
            self.agents: list[Agent] = [Agent(config, Agent.reseed_brain(champion, config))
                                        for _ in range(config.population_size)]
        else:
            self.agents: list[Agent] = [Agent(config) for _ in range(config.population_size)]

    def update(self) -> int:
        """
        Advance every live agent by one tick.

        The ticks run on a pool of 'num_threads' worker threads and are all
        completed before this method returns. The pool is started on the first
        tick of a generation and released once no agent is left.

        Returns:
            The number of agents whose game is still running
        """
        live = [agent for agent in self.agents if not agent.game.is_dead]
        if not live:
            self.close()
            return 0

        serialize = self._config.num_threads == 1

        if serialize:
            alive = [agent.update() for agent in live]
        else:
            alive = self._worker_pool()(delayed(agent.update)() for agent in live)

        num_alive = sum(alive)
        if num_alive == 0:
            self.close()
        return num_alive

    def close(self) -> None:
        """
        Release the worker threads, if any are running.
        """
        if self._parallel is not None:
            self._parallel.__exit__(None, None, None)
            self._parallel = None

    def _worker_pool(self) -> Parallel:
        # Entered once and reused by every tick until 'close()'
        if self._parallel is None:
            self._parallel = Parallel(self._config.num_threads, require="sharedmem")
            self._parallel.__enter__()
        return self._parallel

    def get_gen_summary(self) -> tuple[Network, int]:
        """
        Find the fittest agent of the current generation.
        The population is not modified.

        Returns:
            A copy of the fittest agent's brain, and that agent's score
        """
        fittest = max(self.agents, key=lambda agent: agent.fitness())
        return fittest.brain.copy(), fittest.game.score()

    def generation_stats(self) -> dict:
        """
        Summary statistics for reporting: fitness and score of the current generation.
        """
        fitness = [agent.fitness()    for agent in self.agents]
        scores  = [agent.game.score() for agent in self.agents]
        return {
            "max_fitness" : max(fitness),
            "mean_fitness": float(np.mean(fitness)),
            "max_score"   : max(scores),
            "mean_score"  : float(np.mean(scores)),
            "num_alive"   : sum(not agent.game.is_dead for agent in self.agents),
        }

    def reset(self):
        """
        Replace the current generation with the next one.

        The generation process follows these steps:

        Step 1: Ranking
        - Sort all agents by fitness, highest first (stable: ties keep their order)

        Step 2: Mutation adaptation
        - Pick mutation rate and magnitude from the schedule, given the best score

        Step 3: Reproduction
        - Copy the elites unchanged, then copy and mutate the mutated elites
        - Create the immigrants from scratch
        - Fill the rest with mutated offspring of fitness-proportionate parents

        Every brain of the next generation is wrapped into a new Agent, playing
        a new game.
        """
        self.close()
        size = self._config.population_size

        # Sort all agents by fitness
        fitness = [agent.fitness() for agent in self.agents]
        order   = sorted(range(len(self.agents)), key=lambda i: fitness[i], reverse=True)
        ranked  = [self.agents[i] for i in order]
        fitness = np.array([fitness[i] for i in order], dtype=np.float64)

        self._adapt_mutation(max(agent.game.score() for agent in ranked))

        num_elite   = int(size * self._config.elite_fraction)
        num_mutated = int(size * self._config.mutated_elite_fraction)
        num_random  = int(size * self._config.random_fraction)
        num_bred    = size - num_elite - num_mutated - num_random

        # Apply elitism: the top agents' brains are transferred
        # to the next generation unchanged.
        offspring = [agent.clone() for agent in ranked[:num_elite]]

        # The top agents' brains, mutated
        for agent in ranked[:num_mutated]:
            child = agent.clone()
            child.brain.mutate(self.mutation_rate, self.mutation_magnitude)
            offspring.append(child)

        # New random brains keep the gene pool diverse
        offspring.extend(Agent(self._config) for _ in range(num_random))

        # Roulette wheel: each parent is picked with probability
        # proportional to its fitness (fitness is always >= 1).
        if num_bred > 0:
            parents = np.random.choice(len(ranked), size=(num_bred, 2), p=fitness / fitness.sum())
            for i, j in parents:
                offspring.append(ranked[i].mate(ranked[j], self.mutation_rate, self.mutation_magnitude))

        self.agents = offspring

    def _adapt_mutation(self, gen_max_score: int) -> None:
        """
        Set mutation rate and magnitude from the schedule entry with the highest
        score threshold not exceeding the generation's best score.
        """
        if not self._config.adaptive_mutation:
            return

        selected = None
        for min_score, rate, magnitude in self._config.mutation_schedule:
            if gen_max_score >= min_score:
                selected = (rate, magnitude)
        if selected is None:
            return

        if selected != (self.mutation_rate, self.mutation_magnitude):
            logger.debug("Best score %d: mutation rate %.3f -> %.3f, magnitude %.3f -> %.3f",
                         gen_max_score, self.mutation_rate, selected[0],
                         self.mutation_magnitude, selected[1])
        self.mutation_rate, self.mutation_magnitude = selected

    def __len__(self):
        return len(self.agents)

    def __str__(self):
        return '\n'.join(str(agent) for agent in self.agents)
