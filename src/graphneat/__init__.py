"""
graphneat - genetic encoding of topology-evolving neural networks (NEAT).

This package represents a neural network as a mutable, acyclic graph of node and
connection genes and provides the operators an evolutionary loop needs:
structural and parameter mutation, crossover of two parents aligned by
innovation number, and the compatibility distance used for speciation.
Population management, speciation, fitness evaluation and network execution
are left to the caller.

Main components:
- activations: Activation and aggregation function libraries
- genotype:    Genes, genomes and the shared innovation tracker
- run:         Configuration and logging setup

Example:
    >>> import random
    >>> from graphneat import Config, Genome, InnovationTracker
    >>> config  = Config()
    >>> tracker = InnovationTracker(config)
    >>> rng     = random.Random(42)
    >>> parent1 = Genome(1, config, tracker, rng)
    >>> parent2 = Genome(2, config, tracker, rng)
    >>> parent1.mutate()
    >>> child = Genome(3, config, tracker, rng)
    >>> child.crossover(parent1, parent2)
"""

from loguru import logger

__version__ = "0.1.0"

from graphneat.activations import ActivationFunction, AggregationFunction
from graphneat.run.config  import Config
from graphneat.genotype    import ConnectionGene, DistanceComponents, Genome, InnovationTracker, NodeGene, NodeType

# Silent unless the application opts in
logger.disable("graphneat")

__all__ = [
    "ActivationFunction",
    "AggregationFunction",
    "Config",
    "ConnectionGene",
    "DistanceComponents",
    "Genome",
    "InnovationTracker",
    "NodeGene",
    "NodeType",
]
