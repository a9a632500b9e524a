"""
Integration tests for the configuration system.

These tests verify that a Config loaded from an INI file properly controls
the construction, mutation and comparison of genomes.
"""

import pytest
import random

from graphneat.activations import ActivationFunction, AggregationFunction
from graphneat.genotype import Genome, InnovationTracker
from graphneat.run.config import Config


@pytest.fixture
def load_config(tmp_path):
    def _load(content):
        path = tmp_path / "genome.ini"
        path.write_text(content)
        return Config(str(path))
    return _load


class TestConfigIntegration:
    """Test that Config properly controls genome behavior."""

    def test_io_counts_control_initial_topology(self, load_config):
        config = load_config("[GENOME]\nnum_inputs = 3\nnum_outputs = 2\n")
        genome = Genome(0, config)

        assert len(genome.input_nodes) == 3
        assert len(genome.output_nodes) == 2
        assert len(genome.connections) == 6
        assert sorted(n.id for n in genome.output_nodes) == [3, 4]

    def test_node_defaults(self, load_config):
        config = load_config("[NODE]\n"
                             "activation_default = relu\n"
                             "aggregation_default = max\n"
                             "bias_init_mean = -0.5\n"
                             "response_init_mean = 2.0\n")
        genome = Genome(0, config, rng=random.Random(0))
        genome.mutate_add_node()

        for node in genome.nodes.values():
            assert node.activation == ActivationFunction.RELU
            assert node.aggregation == AggregationFunction.MAX
            assert node.bias == -0.5
            assert node.response == 2.0

    def test_init_stdev_spreads_bias(self, load_config):
        config = load_config("[NODE]\nbias_init_stdev = 1.0\n")
        genome = Genome(0, config, rng=random.Random(1))
        assert len({node.bias for node in genome.nodes.values()}) == len(genome.nodes)

    def test_init_values_clipped(self, load_config):
        config = load_config("[NODE]\nbias_init_mean = 50.0\nbias_max_value = 3.0\n")
        genome = Genome(0, config)
        assert all(node.bias == 3.0 for node in genome.nodes.values())

    def test_weight_bounds(self, load_config):
        config = load_config("[CONNECTION]\n"
                             "weight_min_value = -0.5\n"
                             "weight_max_value = 0.5\n"
                             "weight_mutate_power = 3.0\n")
        rng = random.Random(2)
        genome = Genome(0, config, rng=rng)
        for _ in range(100):
            genome.mutate()

        assert all(-0.5 <= conn.weight <= 0.5 for conn in genome.connections.values())

    def test_structural_mutations_disabled(self, load_config):
        config = load_config("[STRUCTURAL_MUTATIONS]\n"
                             "conn_add_prob = 0.0\n"
                             "conn_del_prob = 0.0\n"
                             "node_add_prob = 0.0\n"
                             "node_del_prob = 0.0\n")
        genome = Genome(0, config, rng=random.Random(3))
        for _ in range(100):
            genome.mutate()

        assert sorted(genome.nodes) == [0, 1, 2, 3, 4]
        assert sorted(genome.connections) == [0, 1, 2, 3]

    def test_only_node_additions(self, load_config):
        config = load_config("[CONNECTION]\n"
                             "enable_prob = 0.0\n"
                             "[STRUCTURAL_MUTATIONS]\n"
                             "conn_add_prob = 0.0\n"
                             "conn_del_prob = 0.0\n"
                             "node_add_prob = 1.0\n"
                             "node_del_prob = 0.0\n")
        genome = Genome(0, config, rng=random.Random(4))
        for _ in range(10):
            genome.mutate()

        # Each mutation splits one enabled connection: +1 node, +2 connections
        assert len(genome.hidden_nodes) == 10
        assert len(genome.connections) == 4 + 20

    def test_small_node_id_space(self, load_config):
        config = load_config("[GENOME]\nnum_inputs = 1\nnum_outputs = 1\nmax_node_id = 4\n")
        genome = Genome(0, config, rng=random.Random(5))

        for _ in range(3):
            genome.mutate_add_node()
        assert sorted(n.id for n in genome.hidden_nodes) == [2, 3, 4]

        with pytest.raises(RuntimeError):
            genome.mutate_add_node()

    def test_speciation_coefficients(self, load_config):
        config = load_config("[SPECIATION]\n"
                             "compat_disjoint_coefficient = 2.0\n"
                             "compat_weight_coefficient = 0.0\n")
        tracker = InnovationTracker(config)
        genome1 = Genome(1, config, tracker, random.Random(6))
        genome2 = Genome(2, config, tracker, random.Random(7))
        genome1.mutate_add_node()

        # Parameter differences are ignored; 3 disjoint genes count twice
        assert genome1.distance(genome2) == 6.0

    def test_invalid_file_rejected_before_use(self, load_config):
        with pytest.raises(ValueError):
            load_config("[NODE]\nactivation_default = unknown\n")
