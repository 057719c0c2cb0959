"""Package initialization for weighted-sampler.

Draws integers from a finite categorical distribution given parallel lists of
outcomes and probabilities.
"""

from weighted_sampler.conformance import ChiSquaredResult
from weighted_sampler.errors import ErrorKind, SamplerError
from weighted_sampler.sampler import (
    PROBABILITY_TOLERANCE,
    UniformSource,
    WeightedSampler,
)

__version__ = "0.1.0"
__all__ = [
    "PROBABILITY_TOLERANCE",
    "ChiSquaredResult",
    "ErrorKind",
    "SamplerError",
    "UniformSource",
    "WeightedSampler",
]
