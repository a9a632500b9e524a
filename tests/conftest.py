"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def config():
    """Default configuration (4 inputs, 1 output)."""
    from graphneat.run.config import Config
    return Config()


@pytest.fixture
def tracker(config):
    """Innovation tracker shared by all genomes of a test."""
    from graphneat.genotype.innovation_tracker import InnovationTracker
    return InnovationTracker(config)


@pytest.fixture
def rng():
    """Seeded source of randomness."""
    return random.Random(42)


@pytest.fixture
def sample_genome(config, tracker, rng):
    """Create a minimal genome for testing."""
    from graphneat.genotype.genome import Genome
    return Genome(1, config, tracker, rng)
