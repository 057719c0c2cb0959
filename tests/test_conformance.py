"""Tests for the statistical conformance helpers.

The convergence checks draw a million samples each, matching the tolerance
the sampler was originally validated against: every empirical frequency
within 0.01 of its configured probability.
"""

import random
from typing import Any

import pytest

from weighted_sampler import ChiSquaredResult, WeightedSampler
from weighted_sampler.conformance import (
    chi_squared_test,
    empirical_frequencies,
    expected_probabilities,
    max_absolute_error,
)

NUM_TRIALS = 1_000_000
MAX_ERROR = 0.01


def random_distribution(rng: random.Random) -> tuple[list[int], list[float]]:
    """Between 5 and 10 distinct outcomes with probabilities in hundredths."""
    count = rng.randint(5, 10)
    outcomes = rng.sample(range(-count, count + 1), count)
    cuts = sorted(rng.choices(range(101), k=count - 1))
    hundredths = [b - a for a, b in zip([0, *cuts], [*cuts, 100])]
    return outcomes, [h / 100 for h in hundredths]


# =============================================================================
# Convergence
# =============================================================================


@pytest.mark.slow
def test_result_converges_to_probabilities_when_lists_are_hardcoded() -> None:
    sampler = WeightedSampler([-1, 0, 1, 2, 3], [0.01, 0.3, 0.58, 0.1, 0.01])
    observed = empirical_frequencies(sampler, NUM_TRIALS)
    for outcome, p in zip(sampler.outcomes, sampler.probabilities):
        assert abs(observed[outcome] - p) < MAX_ERROR


@pytest.mark.slow
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_result_converges_to_probabilities_when_lists_are_generated(
    seed: int,
) -> None:
    outcomes, probabilities = random_distribution(random.Random(seed))
    sampler = WeightedSampler(outcomes, probabilities)
    assert max_absolute_error(sampler, NUM_TRIALS) < MAX_ERROR


@pytest.mark.parametrize("seed", range(20))
def test_generated_distributions_are_valid(seed: int) -> None:
    outcomes, probabilities = random_distribution(random.Random(seed))
    sampler = WeightedSampler(outcomes, probabilities)
    assert len(set(outcomes)) == len(outcomes)
    assert sampler.next() in outcomes


# =============================================================================
# Frequencies
# =============================================================================


def test_expected_probabilities_merge_repeats() -> None:
    sampler = WeightedSampler([5, 6, 5], [0.25, 0.5, 0.25])
    assert expected_probabilities(sampler) == {5: 0.5, 6: 0.5}


def test_empirical_frequencies_with_scripted_draws(scripted: Any) -> None:
    sampler = WeightedSampler([1, 2], [0.5, 0.5], random=scripted([0.1, 0.6, 0.7, 0.9]))
    assert empirical_frequencies(sampler, 4) == {1: 0.25, 2: 0.75}


def test_empirical_frequencies_report_missing_outcomes(scripted: Any) -> None:
    sampler = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5], random=scripted([0.1]))
    assert empirical_frequencies(sampler, 10) == {1: 1.0, 2: 0.0, 3: 0.0}


def test_max_absolute_error_with_scripted_draws(scripted: Any) -> None:
    sampler = WeightedSampler([1, 2], [0.5, 0.5], random=scripted([0.1]))
    assert max_absolute_error(sampler, 10) == pytest.approx(0.5)


@pytest.mark.parametrize("num_samples", [0, -5])
def test_non_positive_sample_count_rejected(num_samples: int) -> None:
    sampler = WeightedSampler([1, 2], [0.5, 0.5])
    with pytest.raises(ValueError):
        empirical_frequencies(sampler, num_samples)
    with pytest.raises(ValueError):
        chi_squared_test(sampler, num_samples)


# =============================================================================
# Chi-squared
# =============================================================================


def test_chi_squared_passes_for_seeded_sampler() -> None:
    sampler = WeightedSampler([-1, 0, 1, 2, 3], [0.01, 0.3, 0.58, 0.1, 0.01], seed=42)
    result = chi_squared_test(sampler, 50000)
    assert result.degrees_of_freedom == 4
    assert result.passes(1e-6)


def test_chi_squared_rejects_biased_source(scripted: Any) -> None:
    """A source stuck in the lower half never reaches the second outcome."""
    sampler = WeightedSampler([1, 2], [0.5, 0.5], random=scripted([0.1, 0.2, 0.3]))
    result = chi_squared_test(sampler, 1000)
    assert result.chi_squared == pytest.approx(1000.0)
    assert not result.passes(0.001)


def test_chi_squared_ignores_zero_probability_outcomes() -> None:
    sampler = WeightedSampler([1, 2, 3], [0.5, 0.0, 0.5], seed=3)
    result = chi_squared_test(sampler, 10000)
    assert result.degrees_of_freedom == 1
    assert result.passes(1e-6)


def test_chi_squared_single_outcome_trivially_passes() -> None:
    sampler = WeightedSampler([42], [1.0])
    assert chi_squared_test(sampler, 100) == ChiSquaredResult(0.0, 1.0, 0)


def test_test_distribution_method_runs_chi_squared() -> None:
    sampler = WeightedSampler([0, 1, 2], [0.2, 0.3, 0.5], seed=11)
    result = sampler.test_distribution(20000)
    assert isinstance(result, ChiSquaredResult)
    assert result.degrees_of_freedom == 2
    assert result.passes(1e-6)


@pytest.mark.parametrize(
    ("p_value", "alpha", "expected"),
    [(0.5, 0.05, True), (0.05, 0.05, True), (0.01, 0.05, False), (0.0, 1e-9, False)],
)
def test_chi_squared_result_passes(p_value: float, alpha: float, expected: bool) -> None:
    result = ChiSquaredResult(chi_squared=1.0, p_value=p_value, degrees_of_freedom=1)
    assert result.passes(alpha) is expected
