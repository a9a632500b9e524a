"""
Activations Package

This package provides the two function libraries evaluated at every node:
the activation functions and the aggregation functions.

Exported:
    activations:         Dictionary mapping activation function names to functions
    activation_codes:    Dictionary mapping activation function names to 3-letter codes
    ActivationFunction:  Enumeration of all activation functions
    aggregations:        Dictionary mapping aggregation function names to functions
    aggregation_codes:   Dictionary mapping aggregation function names to 3-letter codes
    AggregationFunction: Enumeration of all aggregation functions
"""

from graphneat.activations.basic_activations import (
    activations,
    activation_codes,
    ActivationFunction
)
from graphneat.activations.basic_aggregations import (
    aggregations,
    aggregation_codes,
    AggregationFunction
)

__all__ = [
    'activations',
    'activation_codes',
    'ActivationFunction',
    'aggregations',
    'aggregation_codes',
    'AggregationFunction'
]
