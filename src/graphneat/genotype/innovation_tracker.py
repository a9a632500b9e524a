"""
Innovation Tracker Module

This module implements the InnovationTracker class.

Classes:
    InnovationTracker: Population-wide registry of innovation numbers and node IDs
"""

import random
import threading
from typing import TYPE_CHECKING, Collection

from graphneat.run.config import Config
if TYPE_CHECKING:
    from graphneat.genotype.connection_gene import ConnectionGene

class InnovationTracker:
    """
    Tracks structural changes across all genomes of a population.
    Ensures the same structural change gets the same innovation
    number (for connections) and ID (for nodes).

    A single instance must be shared by every genome whose genes are
    compared during crossover or speciation. Its methods may be called
    from several threads.
    """

    def __init__(self, config: Config):
        """
        Create an empty tracker.

        Parameters:
            config: Stores configuration parameters
        """
        self._lock = threading.Lock()

        # Hidden node IDs are drawn from [_min_node_id, _max_node_id]
        self._min_node_id = config.num_inputs + config.num_outputs
        self._max_node_id = config.max_node_id

        self._innovation_counter = 0

        # For each connection ever created, map its endpoints to its innovation number
        self._innovation_numbers: dict[tuple[int, int], int] = {}   # (source, destination) -> innovation number

        # When a connection is split, tracks what node was created and
        # what innovation numbers were assigned to the new connections.
        self._split_IDs: dict[int, tuple[int, int, int]] = {}      # split innovation -> (node ID, innov1, innov2)

        # Every hidden node ID handed out so far
        self._node_ids: set[int] = set()

    @property
    def innovation_counter(self) -> int:
        """The innovation number the next new connection will receive."""
        return self._innovation_counter

    def get_innovation_number(self, source: int, destination: int) -> int:
        """
        Get innovation number for a connection, identified by its endpoints.
        Returns existing innovation number if this connection was created
        before, otherwise assigns a new innovation number.

        Parameters:
            source:      node ID for the 'from' end of the connection
            destination: node ID for the 'to'   end of the connection

        Returns:
            connection ID (a.k.a. innovation number)
        """
        with self._lock:
            return self._get_innovation_number(source, destination)

    def new_node_id(self, taken: Collection[int], rng: random.Random) -> int:
        """
        Draw a fresh hidden node ID uniformly at random.

        Draws are repeated while they collide with an ID in 'taken'
        or with an ID previously issued by this tracker.

        Parameters:
            taken: Node IDs already used by the requesting genome
            rng:   Source of randomness

        Returns:
            The new node ID

        Raises:
            RuntimeError: If no free ID is left
        """
        with self._lock:
            return self._new_node_id(taken, rng)

    def register_node_id(self, node_id: int) -> None:
        """
        Record a hidden node ID chosen outside the tracker, so that it is never drawn again.
        """
        with self._lock:
            self._node_ids.add(node_id)

    def get_split_IDs(self,
                      conn_to_split: 'ConnectionGene',
                      taken        : Collection[int],
                      rng          : random.Random) -> tuple[int, int, int]:
        """
        Get node ID and innovation numbers for splitting a connection.
        If this exact connection has been split before, anywhere in the population,
        returns the same values, otherwise creates new ones.

        The requesting genome may already contain the node registered for this
        split (the connection was split, re-enabled, and is now split again).
        In that case the split produces a different structure, so a fresh node
        ID and the innovation numbers of its two connections are returned.

        Parameters:
            conn_to_split: the connection being split
            taken:         node IDs already used by the requesting genome
            rng:           source of randomness

        Returns:
            3-tuple: (new_node_id, innovation1, innovation2)
            innovation1 is for the connection from the source of 'conn_to_split' to the new node
            innovation2 is for the connection from the new node to the destination of 'conn_to_split'
        """
        with self._lock:
            split_IDs = self._split_IDs.get(conn_to_split.id)
            if split_IDs is not None and split_IDs[0] not in taken:
                return split_IDs

            new_node_id = self._new_node_id(taken, rng)
            innov1 = self._get_innovation_number(conn_to_split.source, new_node_id)
            innov2 = self._get_innovation_number(new_node_id, conn_to_split.destination)

            self._split_IDs.setdefault(conn_to_split.id, (new_node_id, innov1, innov2))
            return new_node_id, innov1, innov2

    def _get_innovation_number(self, source: int, destination: int) -> int:
        key = (source, destination)

        # This is a new connection
        if key not in self._innovation_numbers:
            self._innovation_numbers[key] = self._innovation_counter
            self._innovation_counter += 1

        return self._innovation_numbers[key]

    def _new_node_id(self, taken: Collection[int], rng: random.Random) -> int:
        num_free = (self._max_node_id - self._min_node_id + 1) - len(self._node_ids)
        if num_free <= 0:
            raise RuntimeError("The node ID space is exhausted")

        while True:
            node_id = rng.randint(self._min_node_id, self._max_node_id)
            if node_id not in taken and node_id not in self._node_ids:
                self._node_ids.add(node_id)
                return node_id
