"""Categorical sampler over a fixed set of integer outcomes.

Sampling is inverse-CDF: a uniform draw is located in the cumulative
probability table and the outcome at the first entry strictly above it is
returned.
"""

import logging
import math
import random as _random
import threading
from bisect import bisect_right
from collections.abc import Sequence
from itertools import accumulate
from typing import Protocol

from weighted_sampler.conformance import ChiSquaredResult, chi_squared_test
from weighted_sampler.errors import ErrorKind, SamplerError

logger = logging.getLogger(__name__)

PROBABILITY_TOLERANCE = 1e-6


class UniformSource(Protocol):
    """Anything that produces uniform floats in [0, 1)."""

    def random(self) -> float: ...


class WeightedSampler:
    """Draws outcomes according to a fixed probability vector.

    The sampler owns its random source. Calls to :meth:`next` and
    :meth:`sample` are serialized by a per-instance lock, so one sampler may
    be shared between threads even when the injected source is not
    thread-safe.

    Example:
        >>> sampler = WeightedSampler([-1, 0, 1], [0.2, 0.5, 0.3], seed=7)
        >>> sampler.next() in (-1, 0, 1)
        True
    """

    def __init__(
        self,
        outcomes: Sequence[int],
        probabilities: Sequence[float],
        *,
        random: UniformSource | None = None,
        seed: int | None = None,
    ) -> None:
        if random is not None and seed is not None:
            raise TypeError("Pass either random or seed, not both.")

        outcomes = tuple(outcomes)
        probabilities = tuple(probabilities)
        _validate(outcomes, probabilities)
        probabilities = tuple(float(p) for p in probabilities)

        self._outcomes = outcomes
        self._probabilities = probabilities
        self._cumulative = tuple(accumulate(probabilities))
        self._total = self._cumulative[-1]
        self._random: UniformSource = (
            random if random is not None else _random.Random(seed)
        )
        self._lock = threading.Lock()

        logger.debug(
            "Built sampler over %d outcomes (cumulative total %r)",
            len(outcomes),
            self._total,
        )

    @property
    def outcomes(self) -> tuple[int, ...]:
        return self._outcomes

    @property
    def probabilities(self) -> tuple[float, ...]:
        return self._probabilities

    @property
    def cumulative(self) -> tuple[float, ...]:
        return self._cumulative

    def __len__(self) -> int:
        return len(self._outcomes)

    def __repr__(self) -> str:
        return "WeightedSampler(%r, %r)" % (
            list(self._outcomes),
            list(self._probabilities),
        )

    def probability_of(self, outcome: int) -> float:
        """Total probability of ``outcome``, summed over repeated entries."""
        return math.fsum(
            p for o, p in zip(self._outcomes, self._probabilities) if o == outcome
        )

    def next(self) -> int:
        """Draw a single outcome."""
        with self._lock:
            return self._draw()

    def sample(self, k: int) -> list[int]:
        """Draw ``k`` independent outcomes."""
        if k < 0:
            raise ValueError(f"Sample size must be non-negative, got {k}")
        with self._lock:
            return [self._draw() for _ in range(k)]

    def test_distribution(self, num_samples: int) -> ChiSquaredResult:
        """Run a chi-squared goodness-of-fit test over fresh draws."""
        return chi_squared_test(self, num_samples)

    def _draw(self) -> int:
        u = self._random.random()
        # First index whose cumulative value is strictly greater than u.
        i = bisect_right(self._cumulative, u)
        if i >= len(self._cumulative):
            raise SamplerError(
                ErrorKind.SAMPLING_EXHAUSTED,
                f"draw {u!r} >= cumulative total {self._total!r}",
            )
        return self._outcomes[i]


def _validate(outcomes: Sequence[int], probabilities: Sequence[float]) -> None:
    if len(outcomes) != len(probabilities):
        raise SamplerError(
            ErrorKind.LENGTH_MISMATCH,
            f"{len(outcomes)} outcomes, {len(probabilities)} probabilities",
        )
    for i, p in enumerate(probabilities):
        # Written this way round so NaN is rejected too.
        if not 0.0 <= p <= 1.0:
            raise SamplerError(
                ErrorKind.PROBABILITY_OUT_OF_RANGE, f"probabilities[{i}] = {p!r}"
            )
    total = math.fsum(probabilities)
    if abs(total - 1.0) > PROBABILITY_TOLERANCE:
        raise SamplerError(ErrorKind.PROBABILITY_SUM_INVALID, f"sum = {total!r}")
