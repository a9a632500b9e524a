"""
Shared fixtures for integration tests.
"""

import pytest
import random

from graphneat.genotype import Genome, InnovationTracker
from graphneat.run.config import Config


@pytest.fixture
def evolution_config():
    """Config with two inputs, one output and frequent structural mutations."""
    config = Config()
    config.num_inputs    = 2
    config.num_outputs   = 1
    config.node_add_prob = 0.3
    config.node_del_prob = 0.1
    config.conn_add_prob = 0.5
    config.conn_del_prob = 0.1
    config.validate()
    return config


@pytest.fixture
def population(evolution_config):
    """Ten minimal genomes sharing one tracker and one seeded source of randomness."""
    rng = random.Random(42)
    tracker = InnovationTracker(evolution_config)
    return [Genome(i, evolution_config, tracker, rng) for i in range(10)]


@pytest.fixture
def xor_fitness():
    """
    Toy fitness: evaluate the enabled network on the XOR table and return 4 - squared error.
    """
    return _xor_fitness


def _xor_fitness(genome):
    order = genome.topological_order(enabled_only=True)
    fitness = 4.0
    for inputs, expected in (((0.0, 0.0), 0.0), ((0.0, 1.0), 1.0), ((1.0, 0.0), 1.0), ((1.0, 1.0), 0.0)):
        values = {0: inputs[0], 1: inputs[1]}
        for node_id in order:
            node = genome.nodes[node_id]
            if node_id in values:
                continue
            incoming = [values[genome.connections[i].source] * genome.connections[i].weight
                        for i in sorted(node.incoming) if genome.connections[i].enabled]
            values[node_id] = node.activate(incoming)
        error = values[2] - expected
        fitness -= error * error
    return fitness
