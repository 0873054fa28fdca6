"""
Evosnake Run Package

This package configures and drives an evolution run.

A simulation advances a population of agents one tick at a time, rolls over
to a new generation whenever every game is over, and reports its progress.

Modules:
    config:     Configuration management
    reporter:   Console front-end receiving generation reports
    simulation: The generational loop

Exported Classes:
    Config:            Configuration parameters, read from an INI file
    ConsoleReporter:   Prints generation reports and champions
    GenerationSummary: Statistics of one completed generation
    Simulation:        The generational loop
"""

from evosnake.run.config     import Config
from evosnake.run.reporter   import ConsoleReporter
from evosnake.run.simulation import GenerationSummary, Simulation

__all__ = ['Config', 'ConsoleReporter', 'GenerationSummary', 'Simulation']
