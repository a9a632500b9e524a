"""
Unit tests for the aggregation function library.

Tests all 6 aggregation functions in src/graphneat/activations/basic_aggregations.py
and the AggregationFunction enumeration.
"""

import pytest
import random

from graphneat.activations.basic_aggregations import (
    AggregationFunction,
    aggregations,
    aggregation_codes,
)


class TestAggregationsDictionary:
    """Test the aggregations and aggregation_codes dictionaries."""

    def test_dictionary_has_six_entries(self):
        assert set(aggregations) == {"product", "sum", "max", "min", "maxabs", "mean"}

    def test_every_function_has_a_code(self):
        assert set(aggregation_codes) == set(aggregations)

    def test_enum_covers_dictionary(self):
        assert {member.value for member in AggregationFunction} == set(aggregations)


class TestLiteralValues:
    """Test the documented values of each aggregation."""

    def test_sum(self):
        assert AggregationFunction.SUM.aggregate([1.0, 2.0, 3.0]) == 6.0

    def test_mean(self):
        assert AggregationFunction.MEAN.aggregate([2.0, 4.0]) == 3.0

    def test_product(self):
        assert AggregationFunction.PRODUCT.aggregate([2.0, -3.0, 0.5]) == -3.0

    def test_max(self):
        assert AggregationFunction.MAX.aggregate([1.0, 5.0, -7.0]) == 5.0

    def test_min(self):
        assert AggregationFunction.MIN.aggregate([1.0, 5.0, -7.0]) == -7.0

    def test_maxabs_keeps_sign(self):
        assert AggregationFunction.MAXABS.aggregate([1.0, 5.0, -7.0]) == -7.0
        assert AggregationFunction.MAXABS.aggregate([-1.0, 2.0]) == 2.0

    def test_single_input(self):
        for aggregation in AggregationFunction:
            assert aggregation.aggregate([4.0]) == 4.0

    def test_accepts_tuples(self):
        assert AggregationFunction.SUM.aggregate((1.0, 1.0)) == 2.0


class TestEmptyInput:
    """An empty input sequence yields 0.0 for every aggregation."""

    def test_product_of_empty_is_zero(self):
        assert AggregationFunction.PRODUCT.aggregate([]) == 0.0

    @pytest.mark.parametrize("aggregation", list(AggregationFunction))
    def test_empty_is_zero(self, aggregation):
        assert aggregation.aggregate([]) == 0.0

    @pytest.mark.parametrize("aggregation", list(AggregationFunction))
    def test_returns_python_float(self, aggregation):
        assert isinstance(aggregation.aggregate([]), float)
        assert isinstance(aggregation.aggregate([1.0, 2.0]), float)


class TestRandomAggregation:
    """Test AggregationFunction.random()."""

    def test_covers_all_members(self):
        rng = random.Random(3)
        drawn = {AggregationFunction.random(rng) for _ in range(500)}
        assert drawn == set(AggregationFunction)
