import random
from enum   import Enum
from typing import Sequence

import autograd.numpy as np  # type: ignore

# Every aggregation maps an empty input sequence to 0.0 (this includes the
# product, whose mathematical identity would be 1.0).

def product_aggregation(xs: Sequence[float]):
    if len(xs) == 0:
        return 0.0
    return np.prod(np.array(xs))

def sum_aggregation(xs: Sequence[float]):
    if len(xs) == 0:
        return 0.0
    return np.sum(np.array(xs))

def max_aggregation(xs: Sequence[float]):
    if len(xs) == 0:
        return 0.0
    return np.max(np.array(xs))

def min_aggregation(xs: Sequence[float]):
    if len(xs) == 0:
        return 0.0
    return np.min(np.array(xs))

def maxabs_aggregation(xs: Sequence[float]):
    # Returns the input with the largest magnitude, keeping its sign
    if len(xs) == 0:
        return 0.0
    xs = np.array(xs)
    return xs[np.argmax(np.abs(xs))]

def mean_aggregation(xs: Sequence[float]):
    if len(xs) == 0:
        return 0.0
    return np.mean(np.array(xs))

aggregations = {
    "product": product_aggregation,
    "sum"    : sum_aggregation,
    "max"    : max_aggregation,
    "min"    : min_aggregation,
    "maxabs" : maxabs_aggregation,
    "mean"   : mean_aggregation
    }

# 3-letter identifiers for each aggregation function
aggregation_codes = {
    "product": "PRD",
    "sum"    : "SUM",
    "max"    : "MAX",
    "min"    : "MIN",
    "maxabs" : "MXA",
    "mean"   : "AVG"
    }

class AggregationFunction(Enum):
    """
    The closed set of functions combining the inputs arriving at a node.
    """
    PRODUCT = "product"
    SUM     = "sum"
    MAX     = "max"
    MIN     = "min"
    MAXABS  = "maxabs"
    MEAN    = "mean"

    @property
    def function(self):
        return aggregations[self.value]

    @property
    def code(self) -> str:
        return aggregation_codes[self.value]

    def aggregate(self, xs: Sequence[float]) -> float:
        return float(self.function(xs))

    @classmethod
    def random(cls, rng: random.Random) -> 'AggregationFunction':
        """Draw an aggregation function uniformly at random."""
        return rng.choice(list(cls))
