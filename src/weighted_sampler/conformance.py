"""Statistical conformance checks for a sampler.

These draw from a live sampler and compare what comes out against the
configured probabilities. They are used by the test suite and are handy when
sanity-checking a distribution loaded from elsewhere.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from scipy import stats

if TYPE_CHECKING:
    from weighted_sampler.sampler import WeightedSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChiSquaredResult:
    chi_squared: float
    p_value: float
    degrees_of_freedom: int

    def passes(self, alpha: float = 0.05) -> bool:
        """True when the fit is not rejected at significance level ``alpha``."""
        return self.p_value >= alpha


def _check_num_samples(num_samples: int) -> None:
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")


def expected_probabilities(sampler: "WeightedSampler") -> dict[int, float]:
    """Configured probability per distinct outcome."""
    expected: dict[int, float] = {}
    for outcome in sampler.outcomes:
        if outcome not in expected:
            expected[outcome] = sampler.probability_of(outcome)
    return expected


def empirical_frequencies(
    sampler: "WeightedSampler", num_samples: int
) -> dict[int, float]:
    """Observed frequency per distinct outcome over ``num_samples`` draws.

    Outcomes that were never drawn are reported as ``0.0``.
    """
    _check_num_samples(num_samples)
    counts = Counter(sampler.sample(num_samples))
    return {
        outcome: counts[outcome] / num_samples
        for outcome in expected_probabilities(sampler)
    }


def max_absolute_error(sampler: "WeightedSampler", num_samples: int) -> float:
    """Largest gap between observed and configured probability."""
    expected = expected_probabilities(sampler)
    observed = empirical_frequencies(sampler, num_samples)
    return max(abs(observed[o] - p) for o, p in expected.items())


def chi_squared_test(sampler: "WeightedSampler", num_samples: int) -> ChiSquaredResult:
    """Pearson's chi-squared goodness-of-fit test over fresh draws.

    Outcomes with zero probability are left out of the table since their
    expected count is zero.
    """
    _check_num_samples(num_samples)
    expected = {o: p for o, p in expected_probabilities(sampler).items() if p > 0}
    if len(expected) < 2:
        return ChiSquaredResult(chi_squared=0.0, p_value=1.0, degrees_of_freedom=0)

    counts = Counter(sampler.sample(num_samples))
    # Rescale so expected counts sum to exactly num_samples.
    total = math.fsum(expected.values())
    f_obs = [counts[o] for o in expected]
    f_exp = [p / total * num_samples for p in expected.values()]

    result = stats.chisquare(f_obs, f_exp)
    outcome = ChiSquaredResult(
        chi_squared=float(result.statistic),
        p_value=float(result.pvalue),
        degrees_of_freedom=len(expected) - 1,
    )
    logger.debug(
        "chi-squared over %d draws: chi2=%.4f p=%.4f dof=%d",
        num_samples,
        outcome.chi_squared,
        outcome.p_value,
        outcome.degrees_of_freedom,
    )
    return outcome
