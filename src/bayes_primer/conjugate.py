"""
Bayes Primer — Conjugate Beta-Bernoulli Posterior
=================================================
Closed-form prior/posterior updating for the coin-flip model.

Mathematical Framework:
    Prior:      θ ~ Beta(α, β)
    Data:       h successes, t failures
    Posterior:  θ | y ~ Beta(α + h, β + t)

Uniform(0, 1) is Beta(1, 1), so both priors used in the primer are
conjugate. The exact posterior is the reference the MCMC trace is compared
against and the curve drawn in the prior/posterior plots.

License: MIT
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple
from scipy import stats

from .coin import as_observations
from .priors import PriorSpec


@dataclass(frozen=True)
class BetaPosterior:
    """Beta(alpha, beta) belief about a success probability."""
    alpha: float = 1.0
    beta: float = 1.0

    def __post_init__(self):
        if self.alpha <= 0 or self.beta <= 0:
            raise ValueError(
                f"Beta shapes must be positive, got ({self.alpha}, {self.beta})")

    @classmethod
    def from_prior_spec(cls, spec: PriorSpec) -> 'BetaPosterior':
        """Conjugate form of a prior spec.

        Only Uniform(0, 1) and Beta priors are conjugate to the Bernoulli
        likelihood; anything else, including a truncated prior, raises
        ValueError.
        """
        if spec.truncated:
            raise ValueError(f"Prior {spec.name!r} is truncated to {tuple(spec.bounds)} "
                             f"and is not conjugate to the Bernoulli likelihood")
        if spec.distribution == 'beta':
            return cls(float(spec.params['alpha']), float(spec.params['beta']))
        if spec.distribution == 'uniform':
            lower = float(spec.params.get('lower', 0.0))
            upper = float(spec.params.get('upper', 1.0))
            if (lower, upper) == (0.0, 1.0):
                return cls(1.0, 1.0)
        raise ValueError(f"Prior {spec.name!r} ({spec.distribution}) is not conjugate "
                         f"to the Bernoulli likelihood")

    def update(self, observations: Sequence[int]) -> 'BetaPosterior':
        """Posterior after observing `observations`."""
        obs = as_observations(observations)
        heads = int(obs.sum())
        tails = int(obs.size - heads)
        return BetaPosterior(self.alpha + heads, self.beta + tails)

    @property
    def mean(self) -> float:
        return self.alpha / (self.alpha + self.beta)

    @property
    def variance(self) -> float:
        total = self.alpha + self.beta
        return self.alpha * self.beta / (total ** 2 * (total + 1))

    @property
    def sd(self) -> float:
        return float(np.sqrt(self.variance))

    def pdf(self, grid: np.ndarray) -> np.ndarray:
        return stats.beta.pdf(grid, self.alpha, self.beta)

    def logpdf(self, theta: float) -> float:
        return float(stats.beta.logpdf(theta, self.alpha, self.beta))

    def credible_interval(self, prob: float = 0.95) -> Tuple[float, float]:
        """Equal-tailed credible interval."""
        lower, upper = stats.beta.interval(prob, self.alpha, self.beta)
        return float(lower), float(upper)

    def __str__(self):
        return f"Beta({self.alpha:g}, {self.beta:g})"
