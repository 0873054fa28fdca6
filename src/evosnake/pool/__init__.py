"""
Evosnake Pool Package

This package contains the Population class, which coordinates the evolutionary
process: it advances a generation of agents in parallel and breeds the next one.

Modules:
    population: Top-level population management and evolution

Exported Classes:
    Population: A generation of agents and the operators producing the next one
"""

from evosnake.pool.population import Population

__all__ = ['Population']
