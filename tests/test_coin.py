"""
Unit tests for observation sets and the Bernoulli log-likelihood
"""

import math

import pytest
import numpy as np
from scipy import stats

from bayes_primer.config import ConfigurationError
from bayes_primer.coin import (
    as_observations, generate_observations, bernoulli_log_likelihood,
    BernoulliLogLikelihood, make_log_likelihood
)


class TestObservations:
    """Observation set generation and validation."""

    def test_generated_length_and_values(self):
        obs = generate_observations(50, 0.3, seed=1)
        assert obs.shape == (50,)
        assert set(np.unique(obs)) <= {0, 1}

    def test_generated_observations_are_read_only(self):
        obs = generate_observations(5, 0.5, seed=1)
        with pytest.raises(ValueError):
            obs[0] = 1

    def test_same_seed_same_observations(self):
        np.testing.assert_array_equal(generate_observations(30, 0.6, seed=7),
                                      generate_observations(30, 0.6, seed=7))

    def test_extreme_probabilities(self):
        assert generate_observations(20, 1.0, seed=0).sum() == 20
        assert generate_observations(20, 0.0, seed=0).sum() == 0

    def test_empty_observation_set(self):
        assert generate_observations(0, 0.5, seed=0).size == 0

    @pytest.mark.parametrize("n, p", [(-1, 0.5), (10, 1.5), (10, -0.1)])
    def test_invalid_generation_arguments(self, n, p):
        with pytest.raises(ConfigurationError):
            generate_observations(n, p, seed=0)

    def test_rejects_non_binary(self):
        with pytest.raises(ConfigurationError):
            as_observations([0, 1, 3])

    def test_rejects_two_dimensional(self):
        with pytest.raises(ConfigurationError):
            as_observations([[0, 1], [1, 0]])

    def test_copy_does_not_alias_input(self):
        source = np.array([0, 1, 1])
        obs = as_observations(source)
        source[0] = 1
        assert obs[0] == 0


class TestLogLikelihood:
    """Bernoulli log-likelihood."""

    def test_matches_scipy_sum(self, mixed_flips):
        for theta in (0.1, 0.5, 0.7, 0.95):
            expected = stats.bernoulli.logpmf(mixed_flips, theta).sum()
            assert bernoulli_log_likelihood(theta, mixed_flips) == pytest.approx(expected)

    def test_empty_observations_contribute_zero(self):
        for theta in (0.0, 0.25, 1.0):
            assert bernoulli_log_likelihood(theta, []) == 0.0
        assert make_log_likelihood([])(0.5) == 0.0

    def test_impossible_values_are_negative_infinity(self, all_heads):
        assert bernoulli_log_likelihood(0.0, all_heads) == -math.inf
        assert bernoulli_log_likelihood(1.0, [0, 0]) == -math.inf

    def test_boundary_value_consistent_with_data(self, all_heads):
        assert bernoulli_log_likelihood(1.0, all_heads) == 0.0

    def test_out_of_range_theta(self, mixed_flips):
        assert bernoulli_log_likelihood(-0.1, mixed_flips) == -math.inf
        assert bernoulli_log_likelihood(1.1, mixed_flips) == -math.inf

    def test_bound_likelihood_counts(self, mixed_flips):
        lik = BernoulliLogLikelihood(mixed_flips)
        assert lik.n_successes == 14
        assert lik.n_failures == 6
        assert lik(0.7) == pytest.approx(bernoulli_log_likelihood(0.7, mixed_flips))

    def test_maximum_at_sample_proportion(self, mixed_flips):
        lik = make_log_likelihood(mixed_flips)
        grid = np.linspace(0.01, 0.99, 99)
        values = [lik(t) for t in grid]
        assert grid[int(np.argmax(values))] == pytest.approx(0.7, abs=0.01)
