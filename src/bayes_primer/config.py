"""
Bayes Primer — Configuration
============================
Dataclass configuration objects for the Metropolis-Hastings sampler and the
GLM comparison, plus the error raised when either is misconfigured.

All validation happens before any random numbers are drawn, so a bad
configuration never produces a partial trace.

License: MIT
"""

import math
from dataclasses import dataclass
from numbers import Integral
from typing import Optional


class ConfigurationError(ValueError):
    """Raised for invalid sampler or model configuration."""


# ═══════════════════════════════════════════════════════════════
# Sampler configuration
# ═══════════════════════════════════════════════════════════════

@dataclass
class SamplerConfig:
    """Configuration for a single Metropolis-Hastings chain."""
    iterations: int = 10000        # Exact trace length T
    proposal_sd: float = 0.1       # Scale of the truncated-normal proposal
    seed: Optional[int] = 42       # Seed for numpy.random.default_rng

    # Console output
    progressbar: bool = False      # tqdm progress bar over iterations
    verbose: bool = False          # Print [MCMC] progress lines

    # Warn when fewer than this fraction of proposals were accepted
    min_acceptance_rate: float = 0.05

    def validate(self):
        """Check the configuration, raising ConfigurationError on failure."""
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, Integral):
            raise ConfigurationError(
                f"iterations must be an integer, got {self.iterations!r}")
        if self.iterations < 0:
            raise ConfigurationError(
                f"iterations must be non-negative, got {self.iterations}")

        try:
            sd = float(self.proposal_sd)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"proposal_sd must be a number, got {self.proposal_sd!r}") from None
        if not math.isfinite(sd) or sd <= 0:
            raise ConfigurationError(
                f"proposal_sd must be finite and > 0, got {self.proposal_sd}")

        if self.seed is not None and (
                isinstance(self.seed, bool) or not isinstance(self.seed, Integral)):
            raise ConfigurationError(f"seed must be an integer or None, got {self.seed!r}")


# ═══════════════════════════════════════════════════════════════
# GLM configuration
# ═══════════════════════════════════════════════════════════════

GLM_FAMILIES = ('poisson', 'binomial')


@dataclass
class GLMConfig:
    """Configuration for the frequentist vs Bayesian GLM comparison."""
    family: str = 'poisson'                        # 'poisson' or 'binomial'
    formula: str = 'count ~ forest_z + elevation_z'

    # Bayesian model (PyMC)
    prior_sigma: float = 2.5       # Normal(0, prior_sigma) on every coefficient
    n_draws: int = 1000            # Samples per chain (post-tuning)
    n_tune: int = 1000             # Tuning steps
    n_chains: int = 2
    cores: int = 1
    target_accept: float = 0.9
    seed: Optional[int] = 42
    progressbar: bool = False

    credible_interval: float = 0.95
    rhat_threshold: float = 1.01   # Warn when any coefficient r_hat exceeds this
    verbose: bool = False

    def validate(self):
        """Check the configuration, raising ConfigurationError on failure."""
        if self.family not in GLM_FAMILIES:
            raise ConfigurationError(
                f"Unknown GLM family: {self.family!r}. Available: {GLM_FAMILIES}")
        if '~' not in self.formula:
            raise ConfigurationError(f"formula must be 'response ~ terms', got {self.formula!r}")
        if not self.prior_sigma > 0:
            raise ConfigurationError(f"prior_sigma must be > 0, got {self.prior_sigma}")
        for name in ('n_draws', 'n_chains', 'cores'):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.n_tune < 0:
            raise ConfigurationError(f"n_tune must be >= 0, got {self.n_tune}")
        if not 0 < self.target_accept < 1:
            raise ConfigurationError(
                f"target_accept must be in (0, 1), got {self.target_accept}")
        if not 0 < self.credible_interval < 1:
            raise ConfigurationError(
                f"credible_interval must be in (0, 1), got {self.credible_interval}")
        if not self.rhat_threshold >= 1:
            raise ConfigurationError(
                f"rhat_threshold must be >= 1, got {self.rhat_threshold}")
