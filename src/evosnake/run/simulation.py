"""
Evosnake Simulation Module

This module drives the evolution: it advances the population one tick at a
time, detects the end of each generation, keeps track of the champion network,
persists it when it improves, and starts the next generation.

Classes:
    GenerationSummary: Statistics of one completed generation
    Simulation:        The generational loop
"""

import logging
import random
import time
import numpy as np
from dataclasses import dataclass

from evosnake.network      import Network, save_network
from evosnake.pool         import Population
from evosnake.run.config   import Config
from evosnake.run.reporter import ConsoleReporter

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class GenerationSummary:
    """
    Statistics of one completed generation, produced once at its end.

    Attributes:
        gen_count:         Index of the generation (the first one is 0)
        time_elapsed_secs: Wall time the generation took
        gen_max_score:     Score of the fittest agent of the generation
        sim_max_score:     Best score over all generations so far
        max_fitness:       Highest fitness of the generation
        mean_fitness:      Mean fitness of the generation
    """
    gen_count        : int   = 0
    time_elapsed_secs: float = 0.0
    gen_max_score    : int   = 0
    sim_max_score    : int   = 0
    max_fitness      : float = 0.0
    mean_fitness     : float = 0.0

class Simulation:
    """
    The generational loop of the evolution.

    Each call to 'update()' advances the population by one tick. When no agent
    is left alive the generation is over: its summary is reported, the champion
    is persisted if it beat the best score so far, and the next generation is
    bred.

    Public Attributes:
        gen_count:    Index of the current generation
        population:   The current population
        viz:          The front-end receiving champions and generation summaries
        gen_start_ts: Monotonic time at which the current generation started
        max_score:    Best score over all generations so far
        best_net:     The champion network (None until a generation improves on 0)
        history:      The summaries of all completed generations

    Public Methods:
        update():                 Advance by one tick, rolling over generations as needed
        draw():                   Let the front-end draw
        run(max_generations):     Loop until the given number of generations completed
        stop():                   Release the worker threads and the front-end
        end_current_generation(): Summarize and report the current generation
        start_new_generation():   Breed the next generation
    """

    def __init__(self, config: Config, viz: ConsoleReporter | None = None):
        """
        Parameters:
            config: Stores configuration parameters; when its 'seed' is set, the
                    global random number generators are seeded from it
            viz:    The front-end; any object with the ConsoleReporter hooks
                    will do. Defaults to a ConsoleReporter.
        """
        self._config: Config = config

        # Game seeds and genetic operators all draw from these generators
        if config.seed is not None:
            np.random.seed(config.seed)
            random.seed(config.seed)

        self.gen_count   : int                     = 0
        self.population  : Population              = Population(config)
        self.viz         : ConsoleReporter         = viz if viz is not None else ConsoleReporter()
        self.gen_start_ts: float                   = time.monotonic()
        self.max_score   : int                     = 0
        self.best_net    : Network | None          = None
        self.history     : list[GenerationSummary] = []

        self.viz.setup()

    def update(self) -> None:
        """
        Advance every live agent by one tick; if none is left, roll over
        to the next generation.
        """
        games_alive = self.population.update()
        if games_alive == 0:
            self.end_current_generation()
            self.start_new_generation()

        self.viz.update()

    def draw(self) -> None:
        self.viz.draw()

    def stop(self) -> None:
        self.population.close()
        self.viz.restore_terminal()

    def start_new_generation(self) -> None:
        self.gen_count += 1
        self.population.reset()

    def end_current_generation(self) -> GenerationSummary:
        """
        Summarize the generation that just ended, persisting the champion
        if it strictly improved on the best score so far.

        Returns:
            The summary of the generation
        """
        best_net, gen_max_score = self.population.get_gen_summary()
        stats = self.population.generation_stats()
        if gen_max_score > self.max_score:
            self.max_score = gen_max_score
            self.best_net  = best_net

            path = save_network(best_net, self._config)
            if path is not None:
                logger.info("Generation %d: new best score %d, champion saved to %s",
                            self.gen_count, gen_max_score, path)
            self.viz.update_brain(best_net)

        summary = GenerationSummary(gen_count         = self.gen_count,
                                    time_elapsed_secs = time.monotonic() - self.gen_start_ts,
                                    gen_max_score     = gen_max_score,
                                    sim_max_score     = self.max_score,
                                    max_fitness       = stats["max_fitness"],
                                    mean_fitness      = stats["mean_fitness"])
        self.history.append(summary)

        self.viz.update_summary(summary, self.population.mutation_rate, self.population.mutation_magnitude)
        self.gen_start_ts = time.monotonic()
        return summary

    def run(self, max_generations: int | None = None) -> list[GenerationSummary]:
        """
        Run the simulation until 'max_generations' generations have completed,
        or until interrupted (Ctrl-C) when there is no limit.

        Parameters:
            max_generations: the number of generations to run; if None, the
                             configured 'max_generations' is used

        Returns:
            The summaries of all completed generations
        """
        if max_generations is None:
            max_generations = self._config.max_generations

        draw_interval = self._config.draw_interval_ms / 1000.0
        last_draw     = time.monotonic()

        try:
            while max_generations is None or self.gen_count < max_generations:
                if time.monotonic() - last_draw > draw_interval:
                    self.draw()
                    last_draw = time.monotonic()

                self.update()
        except KeyboardInterrupt:
            logger.info("Interrupted during generation %d", self.gen_count)
        finally:
            self.stop()

        return self.history
