"""
Bayes Primer - Bayesian Inference by Example

Priors and posteriors for a coin's success probability, a hand-rolled
Metropolis-Hastings sampler checked against the exact conjugate posterior,
and frequentist vs Bayesian GLMs fit to ecological count data.
"""

__version__ = "0.1.0"

# Sampler core
from .config import ConfigurationError, SamplerConfig, GLMConfig
from .sampler import (
    MetropolisHastingsSampler,
    SamplerResult,
    run_sampler,
    truncated_normal_proposal,
    save_trace,
    load_trace,
)

# Model pieces
from .coin import (
    BernoulliLogLikelihood,
    bernoulli_log_likelihood,
    generate_observations,
    make_log_likelihood,
)
from .priors import (
    PriorSpec,
    uniform_log_prior,
    beta_log_prior,
    informative_log_prior,
    build_log_prior,
    get_default_priors,
)
from .conjugate import BetaPosterior

# GLM comparison (Bayesian half needs the optional PyMC extra)
from .glm import (
    PYMC_AVAILABLE,
    ARVIZ_AVAILABLE,
    simulate_species_counts,
    simulate_separated_presence,
    detect_complete_separation,
    fit_frequentist_glm,
    fit_bayesian_glm,
    compare_glm_fits,
)

__all__ = [
    "ConfigurationError",
    "SamplerConfig",
    "GLMConfig",
    "MetropolisHastingsSampler",
    "SamplerResult",
    "run_sampler",
    "truncated_normal_proposal",
    "save_trace",
    "load_trace",
    "BernoulliLogLikelihood",
    "bernoulli_log_likelihood",
    "generate_observations",
    "make_log_likelihood",
    "PriorSpec",
    "uniform_log_prior",
    "beta_log_prior",
    "informative_log_prior",
    "build_log_prior",
    "get_default_priors",
    "BetaPosterior",
    "PYMC_AVAILABLE",
    "ARVIZ_AVAILABLE",
    "simulate_species_counts",
    "simulate_separated_presence",
    "detect_complete_separation",
    "fit_frequentist_glm",
    "fit_bayesian_glm",
    "compare_glm_fits",
]
