"""
Evosnake Network Package

This package implements the fixed-topology feed-forward networks that control
the agents, together with their genetic operators and their persistence.

Modules:
    network:     Layer and Network classes (inference, mutation, merge)
    persistence: save_network and load_network (JSON champion files)

Exported:
    Layer:        A fully connected layer of nodes
    Network:      A feed-forward network with genetic operators
    save_network: Persist a champion network, if enabled by the configuration
    load_network: Load a persisted network
"""

from evosnake.network.network     import Layer, Network
from evosnake.network.persistence import load_network, save_network

__all__ = ['Layer',
           'Network',
           'load_network',
           'save_network']
