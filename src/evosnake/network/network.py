"""
Evosnake Network Module

This module implements the fixed-topology, fully connected feed-forward network
that acts as the "brain" of an agent. The network cannot be trained by gradient
descent: it only evolves through the genetic operators it exposes.

Each layer stores its nodes as rows of a weight matrix plus a bias vector, so
node k of a layer is (weights[k, :], biases[k]). All layers apply ReLU.

Classes:
    Layer:   A fully connected layer of nodes
    Network: An ordered sequence of layers with inference and genetic operators
"""

import copy
import numpy as np
from typing import Sequence

from evosnake.activations import relu_activation
from evosnake.errors      import ConfigurationError

class Layer:
    """
    A fully connected layer of a feed-forward network.

    Public Attributes:
        weights: Array of shape (num_nodes, num_inputs), row k holds the weights of node k
        biases:  Array of shape (num_nodes,), entry k is the bias of node k

    Public Properties:
        num_nodes:  Number of nodes in the layer
        num_inputs: Number of weights per node (the width of the previous layer)

    Public Methods:
        predict(inputs):         Compute relu(bias + weights . inputs) for every node
        mutate(rate, magnitude): Perturb weights and biases in place
        merge(other):            Create a new layer by uniform crossover with another one
    """

    def __init__(self, weights: np.ndarray, biases: np.ndarray):
        """
        Parameters:
            weights: the node weights, shape (num_nodes, num_inputs)
            biases:  the node biases, shape (num_nodes,)
        """
        self.weights: np.ndarray = np.asarray(weights, dtype=np.float64)
        self.biases : np.ndarray = np.asarray(biases,  dtype=np.float64)

        if self.weights.ndim != 2 or self.biases.shape != (self.weights.shape[0],):
            raise ConfigurationError(f"Inconsistent layer shapes: weights {self.weights.shape}, "
                                     f"biases {self.biases.shape}")

    @classmethod
    def random(cls, num_nodes: int, num_inputs: int) -> 'Layer':
        """
        Create a layer whose weights and biases are drawn uniformly from [-1, 1).

        Parameters:
            num_nodes:  number of nodes in the layer
            num_inputs: number of weights per node
        """
        weights = np.random.uniform(-1.0, 1.0, size=(num_nodes, num_inputs))
        biases  = np.random.uniform(-1.0, 1.0, size=num_nodes)
        return cls(weights, biases)

    @property
    def num_nodes(self) -> int:
        return self.weights.shape[0]

    @property
    def num_inputs(self) -> int:
        return self.weights.shape[1]

    def predict(self, inputs: np.ndarray) -> np.ndarray:
        return relu_activation(self.biases + self.weights @ inputs)

    def mutate(self, rate: float, magnitude: float) -> None:
        """
        Perturb each weight and each bias, independently with probability 'rate',
        by a value drawn uniformly from [-magnitude, magnitude].
        """
        # Scalars whose draw is >= rate are left untouched, so that a
        # rate of 0 never changes anything.
        mask_weights = np.random.random(self.weights.shape) < rate
        mask_biases  = np.random.random(self.biases.shape)  < rate

        self.weights[mask_weights] += np.random.uniform(-magnitude, magnitude, size=int(mask_weights.sum()))
        self.biases [mask_biases ] += np.random.uniform(-magnitude, magnitude, size=int(mask_biases.sum()))

    def merge(self, other: 'Layer') -> 'Layer':
        """
        Create a new layer in which every weight and every bias is taken
        from 'self' or from 'other' by an independent fair coin flip.
        """
        if self.weights.shape != other.weights.shape:
            raise ConfigurationError(f"Cannot merge layers of shapes {self.weights.shape} "
                                     f"and {other.weights.shape}")

        pick_weights = np.random.random(self.weights.shape) < 0.5
        pick_biases  = np.random.random(self.biases.shape)  < 0.5

        weights = np.where(pick_weights, self.weights, other.weights)
        biases  = np.where(pick_biases,  self.biases,  other.biases)
        return Layer(weights, biases)

    def __eq__(self, other):
        if not isinstance(other, Layer):
            return NotImplemented
        return np.array_equal(self.weights, other.weights) and np.array_equal(self.biases, other.biases)

    def __repr__(self):
        return f"Layer(num_nodes={self.num_nodes}, num_inputs={self.num_inputs})"

class Network:
    """
    A fully connected feed-forward neural network with a fixed topology.

    This is the brain of an agent. The topology is chosen at construction time
    and never changes: the genetic operators only act on weights and biases.
    A network is a plain value: 'copy()' returns an independent network and
    two networks compare equal when their topology and all parameters match.

    Public Attributes:
        layers: The layers of the network, from the first hidden layer to the output layer

    Public Properties:
        input_size:     Number of inputs expected by 'predict()'
        output_size:    Number of outputs returned by 'predict()'
        layer_sizes:    The layer sizes, input width first (as given to the constructor)
        num_parameters: Total number of weights and biases

    Public Methods:
        predict(inputs):         Forward pass, returns the output layer's values
        mutate(rate, magnitude): Perturb weights and biases in place
        merge(other):            Crossover with a network of identical topology
        copy():                  Independent deep copy
        get_bias(layer_index):   Biases of a layer (for visualization)
        to_dict() / from_dict(): Conversion to and from the persisted form
    """

    def __init__(self, layer_sizes: Sequence[int]):
        """
        Create a network with random weights and biases, drawn uniformly from [-1, 1).

        Parameters:
            layer_sizes: the number of nodes of each layer, input layer first;
                         at least 2 entries, all positive
        """
        layer_sizes = list(layer_sizes)
        if len(layer_sizes) < 2:
            raise ConfigurationError("Need at least 2 layers")
        if any(size <= 0 for size in layer_sizes):
            raise ConfigurationError("Empty layers not allowed")

        self._input_size: int = layer_sizes[0]

        # The first entry is the width of the input, each following
        # entry creates a layer connected to the previous one
        self.layers: list[Layer] = []
        for prev_size, size in zip(layer_sizes[:-1], layer_sizes[1:]):
            self.layers.append(Layer.random(size, prev_size))

    @classmethod
    def from_layers(cls, input_size: int, layers: Sequence[Layer]) -> 'Network':
        """
        Assemble a network from existing layers, checking that they chain correctly.

        Parameters:
            input_size: the width of the input vector
            layers:     the layers, first hidden layer first
        """
        if not layers:
            raise ConfigurationError("Need at least 2 layers")
        if input_size <= 0:
            raise ConfigurationError("Empty layers not allowed")

        prev_size = input_size
        for i, layer in enumerate(layers):
            if layer.num_nodes == 0:
                raise ConfigurationError("Empty layers not allowed")
            if layer.num_inputs != prev_size:
                raise ConfigurationError(f"Layer {i} expects {layer.num_inputs} inputs, "
                                         f"but the previous layer has {prev_size} nodes")
            prev_size = layer.num_nodes

        network = cls.__new__(cls)
        network._input_size = input_size
        network.layers      = list(layers)
        return network

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self.layers[-1].num_nodes

    @property
    def layer_sizes(self) -> list[int]:
        return [self._input_size] + [layer.num_nodes for layer in self.layers]

    @property
    def num_parameters(self) -> int:
        return sum(layer.weights.size + layer.biases.size for layer in self.layers)

    def predict(self, inputs: Sequence[float]) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Parameters:
            inputs: the network inputs (exactly 'input_size' values)

        Returns:
            the outputs of the last layer, all >= 0
        """
        if len(inputs) != self._input_size:
            raise ConfigurationError(f"Bad input size, expected {self._input_size} but got {len(inputs)}")

        values = np.asarray(inputs, dtype=np.float64)
        for layer in self.layers:
            values = layer.predict(values)
        return values.tolist()

    def mutate(self, rate: float, magnitude: float) -> None:
        """
        Mutate the network in place.

        Every weight and every bias is perturbed, independently with probability
        'rate', by a value drawn uniformly from [-magnitude, magnitude].
        The topology never changes. A 'rate' of 0 leaves the network unchanged.

        Parameters:
            rate:      probability that any given weight or bias is perturbed
            magnitude: half-width of the perturbation interval
        """
        for layer in self.layers:
            layer.mutate(rate, magnitude)

    def merge(self, other: 'Network') -> 'Network':
        """
        Create a new network by crossover between this network and another.

        Every weight and bias of the child is copied either from this network or
        from 'other', with probability 0.5 each, independently for every scalar.
        Neither parent is modified.

        Parameters:
            other: the other parent; it must have exactly the same topology

        Returns:
            The offspring network
        """
        if self.layer_sizes != other.layer_sizes:
            raise ConfigurationError(f"Cannot merge networks with topologies "
                                     f"{self.layer_sizes} and {other.layer_sizes}")

        layers = [mine.merge(theirs) for mine, theirs in zip(self.layers, other.layers)]
        return Network.from_layers(self._input_size, layers)

    def copy(self) -> 'Network':
        return copy.deepcopy(self)

    def get_bias(self, layer_index: int) -> list[float]:
        """The biases of the nodes in the given layer (0 is the first hidden layer)."""
        return self.layers[layer_index].biases.tolist()

    def to_dict(self) -> dict:
        """
        The persisted form of the network:
            {"n_inputs": int, "layers": [{"nodes": [{"weights": [...], "bias": float}, ...]}, ...]}
        """
        return {
            "n_inputs": self._input_size,
            "layers"  : [{"nodes": [{"weights": weights.tolist(), "bias": float(bias)}
                                    for weights, bias in zip(layer.weights, layer.biases)]}
                         for layer in self.layers],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Network':
        """
        Rebuild a network from the form produced by 'to_dict()'.
        Raises ConfigurationError if the layers do not chain correctly.
        """
        layers = []
        for layer_data in data["layers"]:
            nodes = layer_data["nodes"]
            if not nodes:
                raise ConfigurationError("Empty layers not allowed")
            weights = np.array([node["weights"] for node in nodes], dtype=np.float64)
            biases  = np.array([node["bias"]    for node in nodes], dtype=np.float64)
            layers.append(Layer(weights, biases))
        return cls.from_layers(int(data["n_inputs"]), layers)

    def __eq__(self, other):
        if not isinstance(other, Network):
            return NotImplemented
        return (self._input_size == other._input_size and
                len(self.layers) == len(other.layers) and
                all(a == b for a, b in zip(self.layers, other.layers)))

    def __repr__(self):
        return f"Network(layer_sizes={self.layer_sizes})"

    def __str__(self):
        lines = [f"Network {self.layer_sizes}, {self.num_parameters} parameters"]
        for i, layer in enumerate(self.layers):
            lines.append(f"  layer {i}: {layer.num_nodes} nodes, "
                         f"bias mean={layer.biases.mean():+.3f}, "
                         f"|w| mean={np.abs(layer.weights).mean():.3f}")
        return "\n".join(lines)
