"""
Activations Package

This package provides the activation function used by evosnake networks:
every layer of a network applies ReLU.

Exported:
    relu_activation: max(0, z), element-wise
"""

from evosnake.activations.basic_activations import relu_activation

__all__ = ['relu_activation']
