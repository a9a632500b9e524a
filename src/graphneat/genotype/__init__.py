"""
Genotype Package

This package implements the genetic encoding of a neural network as an acyclic
graph of genes, together with its mutation, crossover and distance operators.

The genotype consists of two types of genes:
- Node genes:       Encode individual neurons with their parameters (bias, response,
                    activation, aggregation) and their incident connections
- Connection genes: Encode weighted connections between neurons with innovation numbers

Modules:
    node_gene:          NodeType enumeration and NodeGene class
    connection_gene:    ConnectionGene class
    genome:             Genome and DistanceComponents classes
    innovation_tracker: InnovationTracker class

Exported Classes:
    NodeType:           Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene:           Gene encoding a single network node
    ConnectionGene:     Gene encoding a weighted connection between nodes
    Genome:             Complete genome representing a neural network
    DistanceComponents: Ingredients of the compatibility distance
    InnovationTracker:  Population-wide tracker for innovation numbers and node IDs
"""

from graphneat.genotype.connection_gene    import ConnectionGene
from graphneat.genotype.genome             import DistanceComponents, Genome
from graphneat.genotype.innovation_tracker import InnovationTracker
from graphneat.genotype.node_gene          import NodeType, NodeGene

__all__ = ['ConnectionGene',
           'DistanceComponents',
           'Genome',
           'InnovationTracker',
           'NodeGene',
           'NodeType']
