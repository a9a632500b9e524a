"""
Genome Module

This module implements the Genome class.

Classes:
    DistanceComponents: Ingredients of the compatibility distance between two genomes
    Genome:             Complete genome representing a neural network structure
"""

import copy
import numpy as np
import random
from collections import deque
from typing      import NamedTuple

from loguru import logger

from graphneat.activations                 import ActivationFunction, AggregationFunction
from graphneat.run.config                  import Config
from graphneat.genotype.connection_gene    import ConnectionGene
from graphneat.genotype.innovation_tracker import InnovationTracker
from graphneat.genotype.node_gene          import NodeType, NodeGene

class DistanceComponents(NamedTuple):
    """
    The terms the compatibility distance between two genomes is built from.

    disjoint_connections: number of connection IDs present in exactly one genome
    disjoint_nodes:       number of node IDs present in exactly one genome
    connection_distance:  sum of the distances between homologous connection genes
    node_distance:        sum of the distances between homologous node genes
    """
    disjoint_connections: int
    disjoint_nodes      : int
    connection_distance : float
    node_distance       : float

class Genome:
    """
    A genome representing a neural network as a collection of node and connection genes.

    The genome encodes the structure and parameters of a neural network at the genotype
    level. It consists of:
    - Node genes: describe network nodes (input, hidden, output) with their parameters
    - Connection genes: describe weighted connections between nodes, each with an
      innovation number used as historical marking during crossover

    A new genome describes the minimal network: every input node directly connected
    to every output node. Via mutation, genomes grow (and shrink) by adding and
    deleting nodes and connections, always keeping the network graph acyclic.
    Disabled connections are part of the graph as far as acyclicity goes.

    Each node gene records the innovation numbers of its incoming and outgoing
    connections. Every method changing the structure updates both the connection
    dictionary and these adjacency sets.

    Node numbering convention:
        - Input nodes:  [0, num_inputs)
        - Output nodes: [num_inputs, num_inputs + num_outputs)
        - Hidden nodes: random IDs in [num_inputs + num_outputs, max_node_id]

    Attributes:
        id:          Identifier of this genome
        fitness:     Fitness assigned by the evaluator; decides the dominant parent in crossover
        nodes:       Dictionary mapping node IDs to NodeGene objects
        connections: Dictionary mapping innovation numbers to ConnectionGene objects

    Public Properties:
        input_nodes:         List of all input node genes
        output_nodes:        List of all output node genes
        hidden_nodes:        List of all hidden node genes
        enabled_connections: List of all enabled connection genes
        innovation_counter:  Next innovation number of the shared tracker

    Public Methods:
        mutate(rng):                          Apply structural and parameter mutations
        mutate_add_node(rng):                 Split a random enabled connection
        mutate_add_conn(rng):                 Try to connect two random nodes
        mutate_delete_node(rng):              Delete a random hidden node
        mutate_delete_conn(rng):              Delete a random connection
        add_connection(source, destination):  Connect two given nodes, if allowed
        delete_node(node_id):                 Delete a hidden node and its connections
        delete_connection(innovation):        Delete a connection
        crossover(parent1, parent2, rng):     Replace this genome's genes by the offspring of two parents
        distance_components(other):           Disjoint counts and homologous gene distances
        distance(other):                      Compatibility distance to another genome
        topological_order(enabled_only):      Node IDs in feed-forward order
        check_invariants():                   Verify the structural invariants
        copy():                               Copy sharing the configuration and tracker
        to_dict():                            Convert genome to dictionary representation

    Class Methods:
        from_dict(genome_dict, ...): Create a genome from a dictionary description
    """

    def __init__(self,
                 genome_id: int = 0,
                 config   : Config            | None = None,
                 tracker  : InnovationTracker | None = None,
                 rng      : random.Random     | None = None):
        """
        Initialize a minimal Genome.

        Every input node is connected to every output node by an enabled connection
        of weight 1.0. All genomes of a population must share the same tracker, so
        that equal structures receive equal innovation numbers.

        Parameters:
            genome_id: Identifier of the genome
            config:    Stores configuration parameters (defaults to 'Config()')
            tracker:   Population-wide innovation tracker (defaults to a private one, which
                       makes the genome incompatible with every other genome)
            rng:       Source of randomness used when no other is passed to an operator
        """
        self._config : Config            = config  if config  is not None else Config()
        self._tracker: InnovationTracker = tracker if tracker is not None else InnovationTracker(self._config)
        self._rng    : random.Random     = rng     if rng     is not None else random.Random()

        self.id         : int                       = genome_id
        self.fitness    : float                     = 0.0
        self.nodes      : dict[int, NodeGene]       = {}  # node ID => node gene
        self.connections: dict[int, ConnectionGene] = {}  # innovation number => connection gene

        num_inputs  = self._config.num_inputs
        num_outputs = self._config.num_outputs

        for node_id in range(num_inputs):
            self.nodes[node_id] = self._create_node(node_id, NodeType.INPUT, self._rng)

        for node_id in range(num_inputs, num_inputs + num_outputs):
            self.nodes[node_id] = self._create_node(node_id, NodeType.OUTPUT, self._rng)

        for node_in in range(num_inputs):
            for node_out in range(num_inputs, num_inputs + num_outputs):
                innovation = self._tracker.get_innovation_number(node_in, node_out)
                self._attach(ConnectionGene(innovation, node_in, node_out, 1.0, self._config))

    @classmethod
    def from_dict(cls,
                  genome_dict: dict,
                  config     : Config            | None = None,
                  tracker    : InnovationTracker | None = None,
                  rng        : random.Random     | None = None) -> 'Genome':
        """
        Create a Genome from a dictionary description.

        This method allows programmatic creation of genomes with specific structures.
        The dictionary specifies nodes and connections; innovation numbers are obtained
        from the tracker, so genomes built against the same tracker align.

        Dictionary format:
            {
                "id": 7,                   # optional
                "fitness": 1.5,            # optional
                "nodes": [
                    {"id": 0, "type": "input"},
                    {"id": 1, "type": "output", "bias": 0.0, "response": 1.0},
                    {"id": 5, "type": "hidden", "bias": 0.5, "activation": "relu", "aggregation": "max"}
                ],
                "connections": [
                    {"from": 0, "to": 5, "weight":  0.5, "enabled": true},
                    {"from": 5, "to": 1, "weight": -0.3}
                ]
            }
        Missing node parameters default to bias 1.0, response 1.0 and the configured
        activation and aggregation functions.

        Parameters:
            genome_dict: Dictionary describing the genome structure
            config:      Configuration; if None, one is created with the node counts of 'genome_dict'
            tracker:     Innovation tracker; if None, a private one is created
            rng:         Source of randomness stored with the genome

        Returns:
            A new Genome object with the specified structure

        Raises:
            ValueError: If the structure is invalid (wrong node numbering, cycles, etc.)
            KeyError:   If required fields are missing from the dictionary
        """
        nodes_data   = genome_dict["nodes"]
        input_nodes  = [n for n in nodes_data if n["type"] == "input"]
        output_nodes = [n for n in nodes_data if n["type"] == "output"]
        hidden_nodes = [n for n in nodes_data if n["type"] == "hidden"]
        if len(input_nodes) + len(output_nodes) + len(hidden_nodes) != len(nodes_data):
            raise ValueError("Node types must be one of 'input', 'output', 'hidden'")

        if config is None:
            config = Config()
            config.num_inputs  = len(input_nodes)
            config.num_outputs = len(output_nodes)
            config.validate()

        cls._validate_node_numbering(input_nodes, output_nodes, hidden_nodes, config)

        if tracker is None:
            tracker = InnovationTracker(config)

        # Create empty genome
        genome = cls.__new__(cls)
        genome._config     = config
        genome._tracker    = tracker
        genome._rng        = rng if rng is not None else random.Random()
        genome.id          = genome_dict.get("id", 0)
        genome.fitness     = genome_dict.get("fitness", 0.0)
        genome.nodes       = {}
        genome.connections = {}

        node_types = {"input": NodeType.INPUT, "output": NodeType.OUTPUT, "hidden": NodeType.HIDDEN}
        for node_data in input_nodes + output_nodes + hidden_nodes:
            node_id = node_data["id"]
            genome.nodes[node_id] = NodeGene(node_id,
                                             node_types[node_data["type"]],
                                             config,
                                             bias        = node_data.get("bias", 1.0),
                                             response    = node_data.get("response", 1.0),
                                             activation  = ActivationFunction(node_data.get("activation", config.activation_default)),
                                             aggregation = AggregationFunction(node_data.get("aggregation", config.aggregation_default)))
        for node_data in hidden_nodes:
            tracker.register_node_id(node_data["id"])

        # Add connections and validate network is acyclic
        for conn_data in genome_dict.get("connections", []):
            node_in  = conn_data["from"]
            node_out = conn_data["to"]

            if node_in not in genome.nodes:
                raise ValueError(f"Connection references non-existent source node: {node_in}")
            if node_out not in genome.nodes:
                raise ValueError(f"Connection references non-existent destination node: {node_out}")
            if genome._are_connected(node_in, node_out):
                raise ValueError(f"Duplicate connection from {node_in} to {node_out}")
            if genome._would_create_cycle(node_in, node_out):
                raise ValueError(f"Connection from {node_in} to {node_out} would create a cycle")

            innovation = tracker.get_innovation_number(node_in, node_out)
            genome._attach(ConnectionGene(innovation, node_in, node_out, conn_data["weight"], config,
                                          enabled=conn_data.get("enabled", True)))

        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        This is the inverse operation of from_dict(): nodes are listed input first,
        then output, then hidden (each group sorted by ID) and connections are
        sorted by innovation number.

        Returns:
            Dictionary in the format accepted by 'from_dict()'
        """
        nodes = []
        for node in sorted(self.input_nodes, key=lambda n: n.id):
            nodes.append({"id": node.id, "type": "input"})

        for node_type, group in (("output", self.output_nodes), ("hidden", self.hidden_nodes)):
            for node in sorted(group, key=lambda n: n.id):
                nodes.append({
                    "id"         : node.id,
                    "type"       : node_type,
                    "bias"       : node.bias,
                    "response"   : node.response,
                    "activation" : node.activation.value,
                    "aggregation": node.aggregation.value
                })

        connections = []
        for conn in sorted(self.connections.values(), key=lambda c: c.id):
            connections.append({
                "from"   : conn.source,
                "to"     : conn.destination,
                "weight" : conn.weight,
                "enabled": conn.enabled
            })

        return {
            "id"         : self.id,
            "fitness"    : self.fitness,
            "nodes"      : nodes,
            "connections": connections
        }

    @staticmethod
    def _validate_node_numbering(input_nodes : list,
                                 output_nodes: list,
                                 hidden_nodes: list,
                                 config      : Config) -> None:
        """
        Validate that nodes follow the numbering convention.

        Raises:
            ValueError: If node numbering doesn't follow the convention
        """
        num_inputs  = config.num_inputs
        num_outputs = config.num_outputs

        input_ids = sorted([n["id"] for n in input_nodes])
        expected_input_ids = list(range(num_inputs))
        if input_ids != expected_input_ids:
            raise ValueError(f"Input nodes must be numbered {expected_input_ids}, got {input_ids}")

        output_ids = sorted([n["id"] for n in output_nodes])
        expected_output_ids = list(range(num_inputs, num_inputs + num_outputs))
        if output_ids != expected_output_ids:
            raise ValueError(f"Output nodes must be numbered {expected_output_ids}, got {output_ids}")

        hidden_ids = [n["id"] for n in hidden_nodes]
        for hid in hidden_ids:
            if not num_inputs + num_outputs <= hid <= config.max_node_id:
                raise ValueError(f"Hidden node {hid} has ID outside [{num_inputs + num_outputs}, {config.max_node_id}]")

        if len(hidden_ids) != len(set(hidden_ids)):
            raise ValueError("Duplicate node IDs found in node list")

    @property
    def input_nodes(self) -> list[NodeGene]:
        return [node for node in self.nodes.values() if node.type == NodeType.INPUT]

    @property
    def output_nodes(self) -> list[NodeGene]:
        return [node for node in self.nodes.values() if node.type == NodeType.OUTPUT]

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return [node for node in self.nodes.values() if node.type == NodeType.HIDDEN]

    @property
    def enabled_connections(self) -> list[ConnectionGene]:
        return [conn for conn in self.connections.values() if conn.enabled]

    @property
    def innovation_counter(self) -> int:
        return self._tracker.innovation_counter

    @property
    def tracker(self) -> InnovationTracker:
        return self._tracker

    def distance_components(self, other: 'Genome') -> DistanceComponents:
        """
        Compare this genome to another gene by gene.

        Genes are matched by ID (innovation number for connections, node ID for nodes).
        Matched genes contribute their parameter distance, unmatched genes are counted.

        Parameters:
            other: the genome relative to which we are calculating the distance

        Returns:
            The disjoint gene counts and the summed distances of homologous genes

        Raises:
            ValueError: If the two genomes do not share the same innovation tracker
        """
        self._check_same_tracker(self, other)

        conn_ids1 = set(self.connections.keys())
        conn_ids2 = set(other.connections.keys())
        node_ids1 = set(self.nodes.keys())
        node_ids2 = set(other.nodes.keys())

        # Summation order is fixed so that the result is exactly symmetric
        connection_distance = sum(self.connections[i].distance(other.connections[i])
                                  for i in sorted(conn_ids1 & conn_ids2))
        node_distance       = sum(self.nodes[i].distance(other.nodes[i])
                                  for i in sorted(node_ids1 & node_ids2))

        return DistanceComponents(disjoint_connections = len(conn_ids1 ^ conn_ids2),
                                  disjoint_nodes       = len(node_ids1 ^ node_ids2),
                                  connection_distance  = float(connection_distance),
                                  node_distance        = float(node_distance))

    def distance(self, other: 'Genome') -> float:
        """
        Calculate the compatibility distance between this genome and another.

            distance = c_d * (D_c + D_n) + W_c + W_n

        Where:
        - D_c, D_n = number of disjoint connection / node genes
        - W_c, W_n = summed distance of homologous connection / node genes
                     (each gene distance is already scaled by 'compat_weight_coefficient')
        - c_d      = 'compat_disjoint_coefficient'

        Parameters:
            other: the genome relative to which we are calculating the distance

        Returns:
            the compatibility distance between this genome and 'other'
        """
        components = self.distance_components(other)
        num_disjoint = components.disjoint_connections + components.disjoint_nodes
        return (self._config.compat_disjoint_coefficient * num_disjoint +
                components.connection_distance +
                components.node_distance)

    def crossover(self, parent1: 'Genome', parent2: 'Genome', rng: random.Random | None = None) -> None:
        """
        Replace the genes of this genome with the offspring of two parents.

        The dominant parent is 'parent1' if its fitness is strictly greater than that
        of 'parent2', otherwise 'parent2' (ties favour the second argument).
        The offspring receives exactly the genes of the dominant parent:
        - genes also present in the other parent: mixed via the gene's own crossover
        - genes absent from the other parent: copied from the dominant parent
        The parents are left untouched.

        Parameters:
            parent1: first parent
            parent2: second parent
            rng:     source of randomness (defaults to this genome's own)

        Raises:
            ValueError: If the parents do not share the same innovation tracker
        """
        self._check_same_tracker(parent1, parent2)
        rng = self._rng if rng is None else rng

        if parent1.fitness > parent2.fitness:
            dominant, recessive = parent1, parent2
        else:
            dominant, recessive = parent2, parent1

        connections = {}
        for innov, conn_gene in dominant.connections.items():
            if innov in recessive.connections:
                connections[innov] = conn_gene.crossover(recessive.connections[innov], rng)
            else:
                connections[innov] = copy.copy(conn_gene)

        nodes = {}
        for node_id, node_gene in dominant.nodes.items():
            if node_id in recessive.nodes:
                nodes[node_id] = node_gene.crossover(recessive.nodes[node_id], rng)
            else:
                nodes[node_id] = node_gene.copy()

        self.nodes       = nodes
        self.connections = connections
        self.fitness     = 0.0

        # The offspring joins the lineage of its parents
        self._config  = dominant._config
        self._tracker = dominant._tracker

    def mutate(self, rng: random.Random | None = None) -> None:
        """
        Apply to the current genome all possible mutation operations.

        Structural mutations (add / delete a node, add / delete a connection) are
        drawn according to the configured policy:
          + 'single_mutation' is True:  exactly one of them is chosen, with probability
                                        proportional to its configured probability
          + 'single_mutation' is False: each occurs independently with its probability
        Afterwards the parameters of every connection gene and node gene are mutated.

        Parameters:
            rng: source of randomness (defaults to this genome's own)
        """
        rng    = self._rng if rng is None else rng
        config = self._config

        structural_mutations = [(config.node_add_prob, self.mutate_add_node),
                                (config.node_del_prob, self.mutate_delete_node),
                                (config.conn_add_prob, self.mutate_add_conn),
                                (config.conn_del_prob, self.mutate_delete_conn)]

        # Case #1: only one structural mutation is allowed at a time
        if config.single_mutation:
            normalizer = sum(prob for prob, _ in structural_mutations)
            if normalizer > 0:
                r = rng.random() * normalizer
                cumulative = 0.0
                for prob, mutation in structural_mutations:
                    cumulative += prob
                    if r < cumulative:
                        mutation(rng)
                        break

        # Case #2: multiple structural mutations are allowed at a time
        else:
            selected = [mutation for prob, mutation in structural_mutations if rng.random() < prob]
            for mutation in selected:
                mutation(rng)

        # Mutate connection parameters
        for conn in self.connections.values():
            conn.mutate(rng)

        # Mutate node parameters
        for node in self.nodes.values():
            node.mutate(rng)

    def mutate_add_node(self, rng: random.Random | None = None) -> None:
        """
        Split an existing connection by adding a new node.

        The connection to split is selected at random from all 'enabled' connections
        and is disabled. It is replaced by two connections through a new hidden node:
        source -> new node (weight 1.0) and new node -> destination (old weight).
        Since a path between the same endpoints already existed, no cycle can arise.

        Raises:
            RuntimeError: If the tracker has no free node ID left (the genome is unchanged)
        """
        rng = self._rng if rng is None else rng

        enabled_conn_genes = self.enabled_connections
        if not enabled_conn_genes:
            return
        split_conn_gene = rng.choice(enabled_conn_genes)

        # From the shared tracker, get the ID for the new node and the
        # innovation numbers (connection IDs) for the two new connections
        new_node_id, innov1, innov2 = self._tracker.get_split_IDs(split_conn_gene, self.nodes.keys(), rng)

        split_conn_gene.enabled = False
        self.nodes[new_node_id] = self._create_node(new_node_id, NodeType.HIDDEN, rng)
        self._attach(ConnectionGene(innov1, split_conn_gene.source, new_node_id, 1.0, self._config))
        self._attach(ConnectionGene(innov2, new_node_id, split_conn_gene.destination,
                                    split_conn_gene.weight, self._config))

        logger.debug("[add_node:{}] {} -> {} >> {} -> {} -> {}",
                     new_node_id, split_conn_gene.source, split_conn_gene.destination,
                     split_conn_gene.source, new_node_id, split_conn_gene.destination)

    def mutate_add_conn(self, rng: random.Random | None = None) -> None:
        """
        Try to add a new connection between two randomly chosen existing nodes.

        The source is drawn among the non-output nodes and the destination among the
        non-input nodes (rather than sources among all non-input nodes and destinations
        among all nodes), so pairs that would always be rejected are never drawn.
        The attempt is silently abandoned if the pair is not allowed (see
        'add_connection()'); the genome is then left unchanged.
        """
        rng = self._rng if rng is None else rng

        sources      = [node.id for node in self.nodes.values() if node.type != NodeType.OUTPUT]
        destinations = [node.id for node in self.nodes.values() if node.type != NodeType.INPUT]
        source       = rng.choice(sources)
        destination  = rng.choice(destinations)

        weight = rng.uniform(self._config.weight_min_value, self._config.weight_max_value)
        self.add_connection(source, destination, weight)

    def mutate_delete_node(self, rng: random.Random | None = None) -> None:
        """
        Randomly delete a hidden node and all its connections.
        """
        rng = self._rng if rng is None else rng

        hidden_nodes = self.hidden_nodes
        if hidden_nodes:
            self.delete_node(rng.choice(hidden_nodes).id)

    def mutate_delete_conn(self, rng: random.Random | None = None) -> None:
        """
        Randomly delete a connection (either enabled or disabled).
        """
        rng = self._rng if rng is None else rng

        if self.connections:
            self.delete_connection(rng.choice(list(self.connections.keys())))

    def add_connection(self,
                       source     : int,
                       destination: int,
                       weight     : float | None = None,
                       rng        : random.Random | None = None) -> ConnectionGene | None:
        """
        Add a connection 'source' -> 'destination', unless it is not allowed.

        A connection is not added if it would:
         + start at an OUTPUT node or end at an INPUT node
         + connect a node to itself
         + duplicate an existing (enabled or disabled) connection between the same nodes
         + create a cycle in the network graph

        Parameters:
            source:      ID of the node the connection starts at
            destination: ID of the node the connection ends at
            weight:      weight of the connection (drawn uniformly from its range if None)
            rng:         source of randomness for the weight draw (defaults to this genome's own)

        Returns:
            The new connection gene, or None if the connection was rejected

        Raises:
            KeyError: If either node does not exist in the genome
        """
        if source not in self.nodes:
            raise KeyError(f"Node with ID {source} does not exist in the genome")
        if destination not in self.nodes:
            raise KeyError(f"Node with ID {destination} does not exist in the genome")

        # Carry out quick checks first
        reason = None
        if self.nodes[source].type == NodeType.OUTPUT:
            reason = "starts at an output node"
        elif self.nodes[destination].type == NodeType.INPUT:
            reason = "ends at an input node"
        elif self._are_connected(source, destination):
            reason = "already exists"

        # Carry out expensive check last
        elif self._would_create_cycle(source, destination):
            reason = "would create a cycle"

        if reason is not None:
            logger.debug("[add_conn] rejected {} -> {}: {}", source, destination, reason)
            return None

        if weight is None:
            rng    = self._rng if rng is None else rng
            weight = rng.uniform(self._config.weight_min_value, self._config.weight_max_value)

        innovation = self._tracker.get_innovation_number(source, destination)
        new_connection = ConnectionGene(innovation, source, destination, weight, self._config)
        self._attach(new_connection)

        logger.debug("[add_conn:{}] {} -({:+.3f})-> {}", innovation, source, weight, destination)
        return new_connection

    def delete_node(self, node_id: int) -> None:
        """
        Delete a node from the genome and remove all connections starting or ending at this node.

        Only hidden nodes can be deleted.

        Parameters:
            node_id: ID of the node to delete

        Raises:
            ValueError: If the node is not a hidden node
            KeyError:   If the node ID does not exist in the genome
        """
        if node_id not in self.nodes:
            raise KeyError(f"Node with ID {node_id} does not exist in the genome")
        node = self.nodes[node_id]

        if node.type != NodeType.HIDDEN:
            raise ValueError(f"Cannot delete node {node_id}: only hidden nodes can be deleted (node type is {node.type.name})")

        for innov in sorted(node.incoming | node.outgoing):
            self.delete_connection(innov)

        del self.nodes[node_id]
        logger.debug("[del_node:{}]", node_id)

    def delete_connection(self, innovation_number: int) -> None:
        """
        Delete a connection from the genome and from the adjacency sets of its endpoints.

        Parameters:
            innovation_number: Innovation number of the connection to delete

        Raises:
            KeyError: If the innovation number does not exist in the genome
        """
        if innovation_number not in self.connections:
            raise KeyError(f"Connection with innovation number {innovation_number} does not exist in the genome")

        conn = self.connections.pop(innovation_number)
        self.nodes[conn.source].outgoing.discard(innovation_number)
        self.nodes[conn.destination].incoming.discard(innovation_number)
        logger.debug("[del_conn:{}] {} -> {}", innovation_number, conn.source, conn.destination)

    def topological_order(self, enabled_only: bool = False) -> list[int]:
        """
        Sort the node IDs so that every connection goes from an earlier to a later node.

        Uses Kahn's algorithm; ties are broken by node ID so the order is deterministic.

        Parameters:
            enabled_only: if True, disabled connections are ignored

        Returns:
            List of node IDs in topological order

        Raises:
            ValueError: If the connection graph contains a cycle
        """
        def successors(node_id):
            for innov in self.nodes[node_id].outgoing:
                conn = self.connections[innov]
                if conn.enabled or not enabled_only:
                    yield conn.destination

        in_degree = {node_id: 0 for node_id in self.nodes}
        for node_id in self.nodes:
            for succ in successors(node_id):
                in_degree[succ] += 1

        # Start with nodes that have no incoming edges
        queue  = deque(sorted(node_id for node_id, degree in in_degree.items() if degree == 0))
        result = []
        while queue:
            node_id = queue.popleft()
            result.append(node_id)

            for succ in sorted(successors(node_id)):
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    queue.append(succ)

        if len(result) != len(self.nodes):
            raise ValueError("The connection graph contains a cycle")
        return result

    def check_invariants(self) -> None:
        """
        Verify the structural invariants of the genome.

        Checks that the input and output nodes are present, that dictionary keys
        match gene IDs, that the adjacency sets agree with the connection genes,
        that no two connections join the same ordered pair of nodes, and that
        the connection graph is acyclic.

        Raises:
            ValueError: describing the first violation found
        """
        num_io = self._config.num_inputs + self._config.num_outputs
        for node_id in range(num_io):
            expected = NodeType.INPUT if node_id < self._config.num_inputs else NodeType.OUTPUT
            if node_id not in self.nodes or self.nodes[node_id].type != expected:
                raise ValueError(f"Missing {expected.name.lower()} node {node_id}")

        for node_id, node in self.nodes.items():
            if node.id != node_id:
                raise ValueError(f"Node stored under ID {node_id} has ID {node.id}")
            if node.type == NodeType.HIDDEN and node_id < num_io:
                raise ValueError(f"Hidden node {node_id} uses a reserved ID")
            for innov in node.incoming:
                if innov not in self.connections or self.connections[innov].destination != node_id:
                    raise ValueError(f"Node {node_id} lists connection {innov} as incoming")
            for innov in node.outgoing:
                if innov not in self.connections or self.connections[innov].source != node_id:
                    raise ValueError(f"Node {node_id} lists connection {innov} as outgoing")

        endpoints = set()
        for innov, conn in self.connections.items():
            if conn.id != innov:
                raise ValueError(f"Connection stored under innovation {innov} has ID {conn.id}")
            if conn.source not in self.nodes or conn.destination not in self.nodes:
                raise ValueError(f"Connection {innov} references a non-existent node")
            if innov not in self.nodes[conn.source].outgoing or innov not in self.nodes[conn.destination].incoming:
                raise ValueError(f"Connection {innov} is missing from the adjacency of its endpoints")
            if (conn.source, conn.destination) in endpoints:
                raise ValueError(f"Duplicate connection from {conn.source} to {conn.destination}")
            endpoints.add((conn.source, conn.destination))

        self.topological_order()

    def copy(self) -> 'Genome':
        """
        Copy the genes of this genome; configuration, tracker and random source are shared.
        """
        clone = Genome.__new__(Genome)
        clone._config     = self._config
        clone._tracker    = self._tracker
        clone._rng        = self._rng
        clone.id          = self.id
        clone.fitness     = self.fitness
        clone.nodes       = {node_id: node.copy() for node_id, node in self.nodes.items()}
        clone.connections = {innov: copy.copy(conn) for innov, conn in self.connections.items()}
        return clone

    def _create_node(self, node_id: int, node_type: NodeType, rng: random.Random) -> NodeGene:
        """
        Create a node gene with parameters drawn according to the configuration.
        """
        config = self._config

        bias = rng.gauss(config.bias_init_mean, config.bias_init_stdev)
        bias = np.minimum(np.maximum(bias, config.bias_min_value), config.bias_max_value)

        response = rng.gauss(config.response_init_mean, config.response_init_stdev)
        response = np.minimum(np.maximum(response, config.response_min_value), config.response_max_value)

        return NodeGene(node_id, node_type, config,
                        bias        = float(bias),
                        response    = float(response),
                        activation  = ActivationFunction(config.activation_default),
                        aggregation = AggregationFunction(config.aggregation_default))

    @staticmethod
    def _check_same_tracker(genome1: 'Genome', genome2: 'Genome') -> None:
        """
        Innovation numbers are only comparable between genomes sharing a tracker.
        """
        if genome1._tracker is not genome2._tracker:
            raise ValueError(f"Genomes {genome1.id} and {genome2.id} use different innovation trackers")

    def _attach(self, conn: ConnectionGene) -> None:
        """
        Insert a connection gene and register it with both of its endpoints.
        """
        self.connections[conn.id] = conn
        self.nodes[conn.source].outgoing.add(conn.id)
        self.nodes[conn.destination].incoming.add(conn.id)

    def _are_connected(self, source: int, destination: int) -> bool:
        """
        Whether a direct connection (enabled or disabled) 'source' -> 'destination' exists.
        """
        return any(self.connections[innov].destination == destination
                   for innov in self.nodes[source].outgoing)

    def _would_create_cycle(self, from_node: int, to_node: int) -> bool:
        """
        Check if adding a connection from_node -> to_node would create a cycle.
        Uses DFS to check if there's already a path from 'to_node' back to 'from_node'.
        Considers ALL connections (both enabled and disabled) to maintain DAG structure.

        Parameters:
            from_node: proposed start of the new connection
            to_node:   proposed end   of the new connection

        Returns:
            whether adding the new connection would create a cycle in the network
        """
        # A self-loop is a cycle
        if from_node == to_node:
            return True

        # If we can reach 'from_node' starting at 'to_node', then adding a
        # connection 'from_node' -> 'to_node' would create a network cycle
        visited = set()
        stack = [to_node]

        while stack:

            current = stack.pop()
            if current == from_node:
                return True   # found path 'to_node' -> 'from_node', would create cycle
            if current in visited:
                continue
            visited.add(current)

            # Add all nodes that can be reached from 'current' in one step
            for innov in self.nodes[current].outgoing:
                stack.append(self.connections[innov].destination)

        return False

    def __str__(self):
        node_genes_str  = ''.join(str(node) for node in self.input_nodes)
        node_genes_str += ''.join(str(node) for node in self.hidden_nodes)
        node_genes_str += ''.join(str(node) for node in self.output_nodes)
        conn_genes_str  = ''.join(str(conn) for conn in self.connections.values())
        return f"Nodes: {node_genes_str}\nConns: {conn_genes_str}"
