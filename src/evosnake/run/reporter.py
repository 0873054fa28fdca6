"""
Evosnake Reporter Module

A console implementation of the visualization hooks used by Simulation.
It prints a report for every completed generation and a description of every
new champion network.

Classes:
    ConsoleReporter: Prints generation reports and champion networks to stdout
"""

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evosnake.network           import Network
    from evosnake.run.simulation    import GenerationSummary

class ConsoleReporter:
    """
    Console front-end of a simulation.

    The simulation pushes new champions and generation summaries to the reporter,
    and periodically asks it to draw; reports accumulated since the last draw are
    printed then. Nothing is printed when 'suppress_output' is True (useful
    in tests or when only the persisted champion matters).

    Public Attributes:
        ticks:    Ticks played in the current generation
        champion: The last champion network received
        summary:  The last generation summary received

    Public Methods:
        setup():                               Print the header of the run
        update():                              Record that a tick was played
        draw():                                Print pending reports
        update_brain(network):                 Record a new champion network
        update_summary(summary, rate, magnitude): Record a generation summary
        restore_terminal():                    Print the final report
    """

    def __init__(self, suppress_output: bool = False):
        self._suppress_output: bool = suppress_output

        self.ticks   : int                        = 0
        self.champion: 'Network | None'           = None
        self.summary : 'GenerationSummary | None' = None

        self._pending: list[str] = []

    def setup(self) -> None:
        self._write("Evolving snakes... (Ctrl-C to stop)\n")

    def update(self) -> None:
        self.ticks += 1

    def draw(self) -> None:
        if self._pending:
            self._write("".join(self._pending))
            self._pending = []

    def update_brain(self, network: 'Network') -> None:
        """
        Record a new champion network.
        """
        self.champion = network

        s  = f"New champion: {network.layer_sizes}, {network.num_parameters} parameters\n"
        for i in range(len(network.layers)):
            biases = network.get_bias(i)
            s += f"  layer {i} biases: [{', '.join(f'{b:+.2f}' for b in biases[:8])}"
            s += ", ...]\n" if len(biases) > 8 else "]\n"
        self._pending.append(s)

    def update_summary(self, summary: 'GenerationSummary', mutation_rate: float, mutation_magnitude: float) -> None:
        """
        Record the summary of a completed generation.
        """
        self.summary = summary

        s  = f"===============\n"
        s += f"GENERATION {summary.gen_count:04d}\n"
        s += f"Best score       = {summary.gen_max_score}\n"
        s += f"All-time best    = {summary.sim_max_score}\n"
        s += f"Fitness          = best {summary.max_fitness:.1f}, mean {summary.mean_fitness:.1f}\n"
        s += f"Ticks played     = {self.ticks}\n"
        s += f"Time elapsed     = {summary.time_elapsed_secs:.2f}s\n"
        s += f"Mutation         = rate {mutation_rate:.3f}, magnitude {mutation_magnitude:.3f}\n"
        self._pending.append(s)

        self.ticks = 0

    def restore_terminal(self) -> None:
        """
        Flush pending reports and print the final result.
        """
        self.draw()
        if self.summary is not None:
            self._write(f"\nStopped after {self.summary.gen_count + 1} generations, "
                        f"best score {self.summary.sim_max_score}\n")

    def _write(self, s: str) -> None:
        if self._suppress_output:
            return
        sys.stdout.write(s)
        sys.stdout.flush()
