"""
Evosnake Agent Package

This package couples networks with games: it turns the state of a game into
network inputs, network outputs into moves, and game statistics into fitness.

Modules:
    perception: Perception vector, ray casting and action decoding
    agent:      Agent, a network playing one game

Exported:
    Agent:           A network playing one snake game
    PERCEPTION_SIZE: Width of the perception vector (the network input width)
    perception_vector, decode_action: Encoding and decoding helpers
"""

from evosnake.agent.perception import PERCEPTION_SIZE, decode_action, perception_vector
from evosnake.agent.agent      import Agent

__all__ = ['Agent',
           'PERCEPTION_SIZE',
           'decode_action',
           'perception_vector']
