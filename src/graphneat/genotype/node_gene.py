"""
Node Gene Module.

This module implements the NodeGene class and NodeType enumeration.

Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node with parameters
"""

import copy
import numpy as np
import random
from enum   import Enum
from typing import Sequence

from graphneat.activations import ActivationFunction, AggregationFunction
from graphneat.run.config  import Config

class NodeType(Enum):
    """
    Nodes come in three types: input, hidden, output.
    """
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

class NodeGene:
    """
    A gene describing a node in a Neural Network.

    Each node gene encodes the properties of a single node in the neural network:
    its type, bias, response, activation and aggregation functions. It also holds
    the innovation numbers of the connections incident to it, so that the genome
    can walk the graph without scanning all its connection genes. Keeping these
    sets consistent with the connection genes is the job of the genome.

    The node computes its output as: bias + response * activation(aggregation(inputs))

    Public Attributes:
        id:          Unique identifier for this node
        type:        Type of node (INPUT, HIDDEN, or OUTPUT)
        bias:        Value added to the scaled activation
        response:    Multiplier applied to the activation
        activation:  Activation function applied to the aggregated input
        aggregation: Function combining the incoming values
        incoming:    Innovation numbers of the connections ending at this node
        outgoing:    Innovation numbers of the connections starting at this node

    Public Methods:
        activate(inputs):      Compute the node output for the given incoming values
        mutate(rng):           Stochastically mutate the node parameters
        crossover(other, rng): Mix the parameters of this node and a homologous one
        copy():                Copy with independent adjacency sets
        distance(other):       Parameter distance to a homologous node
    """

    def __init__(self,
                 node_id    : int,
                 node_type  : NodeType,
                 config     : Config,
                 bias       : float = 1.0,
                 response   : float = 1.0,
                 activation : ActivationFunction  = ActivationFunction.SIGMOID,
                 aggregation: AggregationFunction = AggregationFunction.SUM):
        """
        Initialize a node gene with no incident connections.

        Parameters:
            node_id:     Unique identifier for this node
            node_type:   Type of node (INPUT, HIDDEN, or OUTPUT)
            config:      Stores configuration parameters
            bias:        Value added to the scaled activation
            response:    Multiplier applied to the activation
            activation:  Activation function
            aggregation: Aggregation function
        """
        self._config    : Config              = config
        self.id         : int                 = node_id
        self.type       : NodeType            = node_type
        self.bias       : float               = bias
        self.response   : float               = response
        self.activation : ActivationFunction  = activation
        self.aggregation: AggregationFunction = aggregation
        self.incoming   : set[int]            = set()
        self.outgoing   : set[int]            = set()

    def activate(self, inputs: Sequence[float]) -> float:
        return self.bias + self.response * self.activation.activate(self.aggregation.aggregate(inputs))

    def mutate(self, rng: random.Random) -> None:
        """
        Stochastically mutate the (gene describing the) node.

        Both whether a mutation occurs and its nature & magnitude are stochastic.
        Mutating bias/response can be accomplished in two ways:
         + modifying the current value additively by a small amount
         + replacing the current value by a new one
        The activation and aggregation functions are independently redrawn
        from the complete set of functions.

        Parameters:
            rng: Source of randomness
        """
        config = self._config

        # Attempt to mutate the 'bias'
        r_bias = rng.random()
        if r_bias < config.bias_mutate_rate:
            new_bias  = self.bias + rng.gauss(0, config.bias_mutate_power)
            new_bias  = np.maximum(config.bias_min_value, np.minimum(config.bias_max_value, new_bias))  # Clip it
            self.bias = float(new_bias)

        elif r_bias < config.bias_mutate_rate + config.bias_replace_rate:
            self.bias = rng.uniform(config.bias_min_value, config.bias_max_value)

        # Attempt to mutate the 'response'
        r_response = rng.random()
        if r_response < config.response_mutate_rate:
            new_response  = self.response + rng.gauss(0, config.response_mutate_power)
            new_response  = np.maximum(config.response_min_value, np.minimum(config.response_max_value, new_response))
            self.response = float(new_response)

        elif r_response < config.response_mutate_rate + config.response_replace_rate:
            self.response = rng.uniform(config.response_min_value, config.response_max_value)

        # Attempt to mutate the activation and aggregation functions
        if rng.random() < config.activation_mut_prob:
            self.activation = ActivationFunction.random(rng)

        if rng.random() < config.aggregation_mut_prob:
            self.aggregation = AggregationFunction.random(rng)

    def crossover(self, other: 'NodeGene', rng: random.Random) -> 'NodeGene':
        """
        Create a node gene inheriting each parameter from either this node or 'other'.

        The offspring keeps the identity, type and incident connections of this node.

        Parameters:
            other: Homologous node gene from the other parent
            rng:   Source of randomness

        Returns:
            New node gene
        """
        child = NodeGene(self.id,
                         self.type,
                         self._config,
                         bias        = other.bias        if rng.random() < 0.5 else self.bias,
                         response    = other.response    if rng.random() < 0.5 else self.response,
                         activation  = other.activation  if rng.random() < 0.5 else self.activation,
                         aggregation = other.aggregation if rng.random() < 0.5 else self.aggregation)
        child.incoming = set(self.incoming)
        child.outgoing = set(self.outgoing)
        return child

    def copy(self) -> 'NodeGene':
        clone = copy.copy(self)
        clone.incoming = set(self.incoming)
        clone.outgoing = set(self.outgoing)
        return clone

    def distance(self, other: 'NodeGene') -> float:
        d = abs(self.bias - other.bias) + abs(self.response - other.response)
        if self.activation != other.activation:
            d += 1.0
        if self.aggregation != other.aggregation:
            d += 1.0
        return d * self._config.compat_weight_coefficient

    def __repr__(self):
        return (f"NodeGene(node_id={self.id}, node_type=NodeType.{self.type.name}, "
                f"bias={self.bias}, response={self.response}, "
                f"activation={self.activation}, aggregation={self.aggregation})")

    def __str__(self):
        if self.type == NodeType.INPUT:
            return f"[{self.type.value}{self.id}]"
        return (f"[{self.type.value}{self.id},{self.activation.code},{self.aggregation.code},"
                f"b={self.bias:.2f},r={self.response:.2f}]")
