"""
Connection Gene Module

This module implements the ConnectionGene class.

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

import numpy as np
import random
from graphneat.run.config import Config

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a destination node with an associated weight.
    Connection genes are uniquely identified by their innovation number, which
    serves as a historical marker enabling proper gene alignment during crossover.

    Connections can be enabled or disabled. A disabled connection does not take
    part in the network computation, but it is kept for its history and still
    counts as an edge of the genome graph.

    Public Attributes:
        id:          Innovation number uniquely and globally identifying this connection
        source:      ID of the source node
        destination: ID of the destination node
        weight:      Weight of the connection
        enabled:     Whether this connection is active in the network

    Public Methods:
        mutate(rng):           Stochastically mutate the weight and enabled status
        crossover(other, rng): Mix this gene with the homologous gene of another genome
        distance(other):       Parameter distance to a homologous connection
    """

    def __init__(self,
                 innovation : int,
                 source     : int,
                 destination: int,
                 weight     : float,
                 config     : Config,
                 enabled    : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            innovation:  Number uniquely and globally identifying this connection
            source:      ID of the source node
            destination: ID of the destination node
            weight:      Weight of the connection
            config:      Stores configuration parameters
            enabled:     Whether this connection is active in the network
        """
        self.id         : int    = innovation
        self.source     : int    = source
        self.destination: int    = destination
        self.weight     : float  = weight
        self.enabled    : bool   = enabled
        self._config    : Config = config

    def mutate(self, rng: random.Random) -> None:
        """
        Stochastically mutate the (gene describing the) connection.

        The 'weight' is either perturbed additively, replaced by a new value drawn
        uniformly from its allowed range, or left alone. Independently, the enabled
        status is toggled with a small probability.

        Parameters:
            rng: Source of randomness
        """
        config = self._config

        r = rng.random()
        if r < config.weight_mutate_rate:
            new_weight  = self.weight + rng.gauss(0, config.weight_mutate_power)
            new_weight  = np.maximum(config.weight_min_value, np.minimum(config.weight_max_value, new_weight))  # Clip it
            self.weight = float(new_weight)

        elif r < config.weight_mutate_rate + config.weight_replace_rate:
            self.weight = rng.uniform(config.weight_min_value, config.weight_max_value)

        if rng.random() < config.enable_prob:
            self.enabled = not self.enabled

    def crossover(self, other: 'ConnectionGene', rng: random.Random) -> 'ConnectionGene':
        """
        Create a connection gene inheriting weight and enabled status from either parent.

        The endpoints are those of this gene.

        Parameters:
            other: Gene with the same innovation number, from the other parent
            rng:   Source of randomness

        Returns:
            New connection gene

        Raises:
            ValueError: If the two genes do not share the same innovation number
        """
        if self.id != other.id:
            raise ValueError(f"Cannot cross over connection {self.id} with connection {other.id}")

        weight  = other.weight  if rng.random() < 0.5 else self.weight
        enabled = other.enabled if rng.random() < 0.5 else self.enabled
        return ConnectionGene(self.id, self.source, self.destination, weight, self._config, enabled)

    def distance(self, other: 'ConnectionGene') -> float:
        d = abs(self.weight - other.weight)
        if self.enabled != other.enabled:
            d += 1.0
        return d * self._config.compat_weight_coefficient

    def __repr__(self):
        return (f"ConnectionGene(innovation={self.id:03d}, source={self.source}, destination={self.destination}, "
                f"weight={self.weight:+.6f}, enabled={self.enabled})")

    def __str__(self):
        s  = f"[{self.id:03d},{'E' if self.enabled else 'D'},"
        s += f"{self.source:02d}=>{self.destination:02d},{self.weight:+.02f}]"
        return s
