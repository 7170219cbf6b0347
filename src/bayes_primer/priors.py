"""
Bayes Primer — Priors
=====================
Log-density priors over a success probability θ ∈ [0, 1].

Two variants are used throughout the primer:
- Uninformative: Uniform(0, 1), log-density 0 everywhere in range
- Informative:   Beta(20, 20), concentrated around 0.5

Both are plain functions `f(θ) -> float`; `PriorSpec` describes a prior as
data so it can be turned into a log-density or a conjugate posterior.

License: MIT
"""

import functools
import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
from scipy import stats


LogDensity = Callable[[float], float]


@dataclass
class PriorSpec:
    """Specification for a prior distribution over θ."""
    name: str
    distribution: str  # 'uniform' or 'beta'
    params: Dict       # e.g. {'alpha': 20.0, 'beta': 20.0}
    bounds: Optional[Tuple[float, float]] = (0.0, 1.0)  # hard truncation of θ

    @property
    def truncated(self) -> bool:
        """True when `bounds` cut the prior down from [0, 1]."""
        return self.bounds is not None and tuple(float(b) for b in self.bounds) != (0.0, 1.0)


def uniform_log_prior(theta: float) -> float:
    """Log-density of Uniform(0, 1)."""
    return 0.0 if 0.0 <= theta <= 1.0 else -np.inf


def beta_log_prior(theta: float, alpha: float = 20.0, beta: float = 20.0) -> float:
    """Log-density of Beta(alpha, beta); -inf outside the support."""
    return float(stats.beta.logpdf(theta, alpha, beta))


informative_log_prior = functools.partial(beta_log_prior, alpha=20.0, beta=20.0)


def _uniform_interval_log_prior(theta: float, lower: float, upper: float) -> float:
    return float(stats.uniform.logpdf(theta, loc=lower, scale=upper - lower))


def _truncated_log_prior(theta: float, base: LogDensity, lower: float, upper: float) -> float:
    if not lower <= theta <= upper:
        return -np.inf
    return base(theta)


UNINFORMATIVE = PriorSpec(
    name='uninformative',
    distribution='uniform',
    params={'lower': 0.0, 'upper': 1.0},
)

INFORMATIVE = PriorSpec(
    name='informative',
    distribution='beta',
    params={'alpha': 20.0, 'beta': 20.0},
)


def get_default_priors() -> List[PriorSpec]:
    """The uninformative and informative priors compared in the primer."""
    return [UNINFORMATIVE, INFORMATIVE]


def get_prior(name: str) -> PriorSpec:
    for spec in get_default_priors():
        if spec.name == name:
            return spec
    raise ValueError(f"Unknown prior: {name!r}. "
                     f"Available: {[p.name for p in get_default_priors()]}")


def _base_log_prior(spec: PriorSpec) -> LogDensity:
    if spec.distribution == 'uniform':
        lower = float(spec.params.get('lower', 0.0))
        upper = float(spec.params.get('upper', 1.0))
        if not lower < upper:
            raise ValueError(f"Uniform prior needs lower < upper, got ({lower}, {upper})")
        if (lower, upper) == (0.0, 1.0):
            return uniform_log_prior
        return functools.partial(_uniform_interval_log_prior, lower=lower, upper=upper)

    if spec.distribution == 'beta':
        alpha = float(spec.params['alpha'])
        beta = float(spec.params['beta'])
        if alpha <= 0 or beta <= 0:
            raise ValueError(f"Beta prior needs positive shapes, got ({alpha}, {beta})")
        return functools.partial(beta_log_prior, alpha=alpha, beta=beta)

    raise ValueError(f"Unknown distribution: {spec.distribution}")


def build_log_prior(spec: PriorSpec) -> LogDensity:
    """Turn a PriorSpec into a log-density function.

    Bounds narrower than [0, 1] truncate the density: -inf outside, the
    unnormalized log-density inside.

    Args:
        spec: Prior specification

    Returns:
        Callable mapping θ to log p(θ)
    """
    log_prior = _base_log_prior(spec)
    if not spec.truncated:
        return log_prior

    lower, upper = (float(b) for b in spec.bounds)
    if not 0.0 <= lower < upper <= 1.0:
        raise ValueError(f"Prior bounds must satisfy 0 <= lower < upper <= 1, "
                         f"got {tuple(spec.bounds)}")
    return functools.partial(_truncated_log_prior, base=log_prior, lower=lower, upper=upper)
