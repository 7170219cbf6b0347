"""
Unit tests for prior log-densities
"""

import math

import pytest
from scipy import stats

from bayes_primer.priors import (
    PriorSpec, uniform_log_prior, beta_log_prior, informative_log_prior,
    build_log_prior, get_default_priors, get_prior, UNINFORMATIVE, INFORMATIVE
)


class TestPriorFunctions:
    """The two prior variants."""

    @pytest.mark.parametrize("theta", [0.0, 0.2, 0.5, 1.0])
    def test_uniform_is_zero_in_range(self, theta):
        assert uniform_log_prior(theta) == 0.0

    @pytest.mark.parametrize("theta", [-0.01, 1.01])
    def test_uniform_is_negative_infinity_outside(self, theta):
        assert uniform_log_prior(theta) == -math.inf

    def test_informative_matches_beta_20_20(self):
        for theta in (0.2, 0.5, 0.8):
            assert informative_log_prior(theta) == pytest.approx(
                stats.beta.logpdf(theta, 20, 20))

    def test_informative_peaks_at_half(self):
        assert informative_log_prior(0.5) > informative_log_prior(0.4)
        assert informative_log_prior(0.4) == pytest.approx(informative_log_prior(0.6))

    def test_beta_boundaries(self):
        assert beta_log_prior(0.0, 20.0, 20.0) == -math.inf
        assert beta_log_prior(1.5, 2.0, 2.0) == -math.inf


class TestPriorSpecs:
    """PriorSpec registry and builder."""

    def test_default_priors(self):
        priors = get_default_priors()
        assert [p.name for p in priors] == ['uninformative', 'informative']
        assert all(isinstance(p, PriorSpec) for p in priors)

    def test_get_prior_by_name(self):
        assert get_prior('informative') is INFORMATIVE
        with pytest.raises(ValueError):
            get_prior('jeffreys')

    def test_build_uniform(self):
        assert build_log_prior(UNINFORMATIVE) is uniform_log_prior

    def test_build_uniform_subinterval(self):
        log_prior = build_log_prior(
            PriorSpec('narrow', 'uniform', {'lower': 0.25, 'upper': 0.75}))
        assert log_prior(0.5) == pytest.approx(math.log(2.0))
        assert log_prior(0.9) == -math.inf

    def test_build_beta(self):
        log_prior = build_log_prior(INFORMATIVE)
        assert log_prior(0.3) == pytest.approx(informative_log_prior(0.3))

    def test_default_bounds_are_not_truncated(self):
        assert not INFORMATIVE.truncated
        assert not PriorSpec('open', 'beta', {'alpha': 2.0, 'beta': 2.0}, bounds=None).truncated

    def test_build_truncated_beta(self):
        spec = PriorSpec('clipped', 'beta', {'alpha': 2.0, 'beta': 2.0}, bounds=(0.3, 0.7))
        log_prior = build_log_prior(spec)

        assert spec.truncated
        assert log_prior(0.2) == -math.inf
        assert log_prior(0.8) == -math.inf
        assert log_prior(0.5) == pytest.approx(stats.beta.logpdf(0.5, 2, 2))
        assert log_prior(0.3) == pytest.approx(stats.beta.logpdf(0.3, 2, 2))

    def test_truncated_uniform_restricts_support(self):
        log_prior = build_log_prior(
            PriorSpec('clipped', 'uniform', {'lower': 0.0, 'upper': 1.0}, bounds=(0.0, 0.5)))
        assert log_prior(0.25) == 0.0
        assert log_prior(0.75) == -math.inf

    @pytest.mark.parametrize("bounds", [(0.6, 0.4), (-0.1, 0.5), (0.5, 1.5)])
    def test_invalid_bounds(self, bounds):
        with pytest.raises(ValueError, match="bounds"):
            build_log_prior(PriorSpec('bad', 'beta', {'alpha': 2.0, 'beta': 2.0}, bounds=bounds))

    def test_unknown_distribution(self):
        with pytest.raises(ValueError, match="Unknown distribution"):
            build_log_prior(PriorSpec('odd', 'cauchy', {}))

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            build_log_prior(PriorSpec('bad', 'beta', {'alpha': 0.0, 'beta': 1.0}))
        with pytest.raises(ValueError):
            build_log_prior(PriorSpec('bad', 'uniform', {'lower': 1.0, 'upper': 0.0}))
