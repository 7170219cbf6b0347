"""
Bayes Primer — Coin-Flip Model
==============================
Observation sets of binary outcomes and the Bernoulli log-likelihood used as
the target for the Metropolis-Hastings sampler.

Mathematical Framework:
    log L(θ | y) = Σ_i log Bernoulli(y_i | θ)
                 = h·log(θ) + t·log(1 − θ)

    with h = number of successes and t = number of failures.

License: MIT
"""

import numpy as np
from typing import Optional, Sequence
from scipy.special import xlogy, xlog1py

from .config import ConfigurationError


def as_observations(observations: Sequence[int]) -> np.ndarray:
    """Validate and freeze an observation set.

    Args:
        observations: Sequence of 0/1 outcomes

    Returns:
        Read-only 1-D int array
    """
    arr = np.asarray(observations)
    if arr.ndim != 1:
        raise ConfigurationError(
            f"observations must be one-dimensional, got shape {arr.shape}")
    if arr.size and not np.isin(arr, (0, 1)).all():
        raise ConfigurationError("observations must contain only 0 and 1")

    arr = arr.astype(np.int64, copy=True)
    arr.setflags(write=False)
    return arr


def generate_observations(n: int,
                          p_true: float = 0.5,
                          rng: Optional[np.random.Generator] = None,
                          seed: Optional[int] = None) -> np.ndarray:
    """Flip a coin with success probability `p_true`, `n` times.

    Args:
        n: Number of flips
        p_true: Probability of a success (1)
        rng: Generator to draw from (takes precedence over `seed`)
        seed: Seed for a fresh generator when `rng` is None

    Returns:
        Read-only int array of 0/1 outcomes
    """
    if n < 0:
        raise ConfigurationError(f"n must be non-negative, got {n}")
    if not 0.0 <= p_true <= 1.0:
        raise ConfigurationError(f"p_true must lie in [0, 1], got {p_true}")

    if rng is None:
        rng = np.random.default_rng(seed)
    return as_observations(rng.binomial(1, p_true, size=n))


def _log_likelihood_from_counts(theta: float, n_successes: int, n_failures: int) -> float:
    if n_successes == 0 and n_failures == 0:
        return 0.0
    if not 0.0 <= theta <= 1.0:
        return -np.inf
    # xlogy(0, 0) == 0, so an all-failure set at θ = 0 stays finite
    return float(xlogy(n_successes, theta) + xlog1py(n_failures, -theta))


def bernoulli_log_likelihood(theta: float, observations: Sequence[int]) -> float:
    """Sum of Bernoulli log-densities of `observations` at success probability θ.

    Returns 0.0 for an empty observation set and -inf when θ lies outside
    [0, 1] or makes an observed outcome impossible.
    """
    obs = as_observations(observations)
    n_successes = int(obs.sum())
    return _log_likelihood_from_counts(theta, n_successes, obs.size - n_successes)


class BernoulliLogLikelihood:
    """Log-likelihood bound to a fixed observation set.

    The success/failure counts are sufficient statistics, so they are
    computed once and each call is O(1).
    """

    def __init__(self, observations: Sequence[int]):
        self.observations = as_observations(observations)
        self.n_successes = int(self.observations.sum())
        self.n_failures = int(self.observations.size - self.n_successes)

    def __call__(self, theta: float) -> float:
        return _log_likelihood_from_counts(theta, self.n_successes, self.n_failures)

    def __repr__(self):
        return (f"BernoulliLogLikelihood(n={self.observations.size}, "
                f"successes={self.n_successes})")


def make_log_likelihood(observations: Sequence[int]) -> BernoulliLogLikelihood:
    """Build the coin-flip log-likelihood for an observation set."""
    return BernoulliLogLikelihood(observations)
