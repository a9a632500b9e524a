"""
Unit tests for ConnectionGene class.

Tests cover initialization, mutation, crossover, distance
and string representations.
"""

import pytest
import random
from unittest.mock import Mock

from graphneat.genotype.connection_gene import ConnectionGene
from graphneat.run.config import Config


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def basic_config():
    """Config with standard parameters for connection genes."""
    config = Mock(spec=Config)
    config.weight_mutate_rate  = 0.8
    config.weight_replace_rate = 0.1
    config.weight_mutate_power = 0.5
    config.weight_min_value    = -30.0
    config.weight_max_value    = 30.0
    config.enable_prob         = 0.02
    config.compat_weight_coefficient = 1.0
    return config


@pytest.fixture
def no_mutation_config(basic_config):
    """Config with zero mutation probabilities."""
    basic_config.weight_mutate_rate  = 0.0
    basic_config.weight_replace_rate = 0.0
    basic_config.enable_prob         = 0.0
    return basic_config


@pytest.fixture
def tight_config(basic_config):
    """Config with a narrow weight range and large perturbations."""
    basic_config.weight_min_value    = -1.0
    basic_config.weight_max_value    = 1.0
    basic_config.weight_mutate_power = 5.0
    return basic_config


@pytest.fixture
def connection(basic_config):
    return ConnectionGene(7, 0, 4, 0.5, basic_config)


# ============================================================================
# Test: Constructor
# ============================================================================

class TestConnectionGeneInit:
    """Test ConnectionGene initialization."""

    def test_attributes(self, connection, basic_config):
        assert connection.id == 7
        assert connection.source == 0
        assert connection.destination == 4
        assert connection.weight == 0.5
        assert connection.enabled is True
        assert connection._config is basic_config

    def test_disabled(self, basic_config):
        conn = ConnectionGene(1, 0, 4, 0.5, basic_config, enabled=False)
        assert conn.enabled is False


# ============================================================================
# Test: Mutation
# ============================================================================

class TestConnectionGeneMutate:
    """Test ConnectionGene.mutate()."""

    def test_no_mutation_with_zero_probabilities(self, no_mutation_config):
        conn = ConnectionGene(1, 0, 4, 0.5, no_mutation_config)
        rng = random.Random(0)

        for _ in range(100):
            conn.mutate(rng)

        assert conn.weight == 0.5
        assert conn.enabled is True

    def test_weight_perturbation(self, no_mutation_config):
        no_mutation_config.weight_mutate_rate = 1.0
        conn = ConnectionGene(1, 0, 4, 0.5, no_mutation_config)

        rng1 = random.Random(1)
        rng2 = random.Random(1)
        conn.mutate(rng1)

        rng2.random()
        expected = 0.5 + rng2.gauss(0, no_mutation_config.weight_mutate_power)
        assert conn.weight == pytest.approx(expected)

    def test_weight_replacement_within_bounds(self, no_mutation_config):
        no_mutation_config.weight_replace_rate = 1.0
        no_mutation_config.weight_min_value = -2.0
        no_mutation_config.weight_max_value = 3.0
        conn = ConnectionGene(1, 0, 4, 0.0, no_mutation_config)
        rng = random.Random(2)

        values = []
        for _ in range(300):
            conn.mutate(rng)
            values.append(conn.weight)

        assert all(-2.0 <= w <= 3.0 for w in values)
        assert min(values) < -1.5
        assert max(values) > 2.5

    def test_weight_clamped(self, tight_config):
        conn = ConnectionGene(1, 0, 4, 0.0, tight_config)
        rng = random.Random(3)

        for _ in range(1000):
            conn.mutate(rng)
            assert -1.0 <= conn.weight <= 1.0

    def test_weight_is_python_float(self, tight_config):
        conn = ConnectionGene(1, 0, 4, 0.0, tight_config)
        rng = random.Random(4)
        for _ in range(20):
            conn.mutate(rng)
        assert type(conn.weight) is float

    def test_enable_toggles(self, no_mutation_config):
        no_mutation_config.enable_prob = 1.0
        conn = ConnectionGene(1, 0, 4, 0.5, no_mutation_config)
        rng = random.Random(5)

        conn.mutate(rng)
        assert conn.enabled is False
        conn.mutate(rng)
        assert conn.enabled is True
        assert conn.weight == 0.5

    def test_enable_toggle_frequency(self, no_mutation_config):
        no_mutation_config.enable_prob = 0.25
        conn = ConnectionGene(1, 0, 4, 0.5, no_mutation_config)
        rng = random.Random(6)

        toggles = 0
        for _ in range(4000):
            before = conn.enabled
            conn.mutate(rng)
            toggles += conn.enabled != before

        assert 800 < toggles < 1200

    def test_endpoints_never_change(self, basic_config):
        conn = ConnectionGene(1, 2, 9, 0.5, basic_config)
        rng = random.Random(7)
        for _ in range(100):
            conn.mutate(rng)
        assert (conn.id, conn.source, conn.destination) == (1, 2, 9)


# ============================================================================
# Test: Crossover
# ============================================================================

class TestConnectionGeneCrossover:
    """Test ConnectionGene.crossover()."""

    def test_child_keeps_identity(self, basic_config):
        conn1 = ConnectionGene(3, 0, 5, 1.0, basic_config)
        conn2 = ConnectionGene(3, 0, 5, -1.0, basic_config, enabled=False)

        child = conn1.crossover(conn2, random.Random(0))

        assert child is not conn1
        assert (child.id, child.source, child.destination) == (3, 0, 5)

    def test_inherits_from_both_parents(self, basic_config):
        conn1 = ConnectionGene(3, 0, 5, 1.0, basic_config)
        conn2 = ConnectionGene(3, 0, 5, -1.0, basic_config, enabled=False)
        rng = random.Random(1)

        combinations = set()
        for _ in range(100):
            child = conn1.crossover(conn2, rng)
            combinations.add((child.weight, child.enabled))

        assert combinations == {(1.0, True), (1.0, False), (-1.0, True), (-1.0, False)}

    def test_mismatched_innovation_raises(self, basic_config):
        conn1 = ConnectionGene(3, 0, 5, 1.0, basic_config)
        conn2 = ConnectionGene(4, 0, 5, 1.0, basic_config)

        with pytest.raises(ValueError):
            conn1.crossover(conn2, random.Random(0))


# ============================================================================
# Test: Distance
# ============================================================================

class TestConnectionGeneDistance:
    """Test ConnectionGene.distance()."""

    def test_distance_to_self_is_zero(self, connection):
        assert connection.distance(connection) == 0.0

    def test_weight_difference(self, basic_config):
        conn1 = ConnectionGene(3, 0, 5, 1.0, basic_config)
        conn2 = ConnectionGene(3, 0, 5, -0.5, basic_config)
        assert conn1.distance(conn2) == 1.5

    def test_enabled_difference_adds_one(self, basic_config):
        conn1 = ConnectionGene(3, 0, 5, 1.0, basic_config)
        conn2 = ConnectionGene(3, 0, 5, 1.0, basic_config, enabled=False)
        assert conn1.distance(conn2) == 1.0

    def test_scaled_by_weight_coefficient(self, basic_config):
        basic_config.compat_weight_coefficient = 2.0
        conn1 = ConnectionGene(3, 0, 5, 1.0, basic_config)
        conn2 = ConnectionGene(3, 0, 5, 0.0, basic_config, enabled=False)
        assert conn1.distance(conn2) == 4.0

    def test_symmetry(self, basic_config):
        conn1 = ConnectionGene(3, 0, 5, 0.3, basic_config)
        conn2 = ConnectionGene(3, 0, 5, -2.7, basic_config, enabled=False)
        assert conn1.distance(conn2) == conn2.distance(conn1)


# ============================================================================
# Test: String Methods
# ============================================================================

class TestConnectionGeneStringMethods:
    """Test __str__ and __repr__."""

    def test_str_enabled(self, basic_config):
        conn = ConnectionGene(3, 0, 4, 1.0, basic_config)
        assert str(conn) == "[003,E,00=>04,+1.00]"

    def test_str_disabled(self, basic_config):
        conn = ConnectionGene(12, 1, 1234, -0.456, basic_config, enabled=False)
        assert str(conn) == "[012,D,01=>1234,-0.46]"

    def test_repr(self, basic_config):
        conn = ConnectionGene(3, 0, 4, 1.0, basic_config)
        assert repr(conn) == "ConnectionGene(innovation=003, source=0, destination=4, weight=+1.000000, enabled=True)"
