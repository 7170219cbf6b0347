"""
Bayes Primer — Metropolis-Hastings Sampler
==========================================
A textbook random-walk Metropolis-Hastings sampler over a scalar parameter
θ ∈ [0, 1].

Algorithm:
    θ_0 ~ Uniform(0, 1)
    for t = 1 .. T:
        θ* ~ Normal(θ_{t-1}, σ) truncated to [0, 1]
        r  = exp(log π(θ*) − log π(θ_{t-1}))
        u  ~ Uniform[0, 1)
        θ_t = θ* if u < r else θ_{t-1}
        record θ_t

    where log π(θ) = log p(θ) + log L(θ | y).

The acceptance ratio is accumulated in log-space and only exponentiated for
the comparison with u, so long observation sequences do not underflow.
Candidates with a log-density of -inf exponentiate to 0 and are rejected.

Usage:
    from bayes_primer import run_sampler, uniform_log_prior

    trace = run_sampler(observations=[1, 1, 0, 1],
                        log_prior=uniform_log_prior,
                        iterations=5000,
                        proposal_sd=0.1,
                        seed=42)

License: MIT
"""

import json
import warnings
import numpy as np
from dataclasses import asdict, dataclass, field
from typing import Callable, Optional, Sequence
from pathlib import Path
from scipy import stats
from tqdm import tqdm

from .coin import make_log_likelihood, as_observations
from .config import ConfigurationError, SamplerConfig


LogDensity = Callable[[float], float]


# ═══════════════════════════════════════════════════════════════
# Result container
# ═══════════════════════════════════════════════════════════════

@dataclass
class SamplerResult:
    """Output of a single chain."""
    trace: np.ndarray                  # [T] accepted states, one per iteration
    n_accepted: int                    # Number of accepted proposals
    initial_state: float               # θ_0 drawn from Uniform(0, 1)
    config: SamplerConfig = field(default_factory=SamplerConfig)

    @property
    def iterations(self) -> int:
        return int(self.trace.size)

    @property
    def acceptance_rate(self) -> float:
        if self.trace.size == 0:
            return 0.0
        return self.n_accepted / self.trace.size

    @property
    def posterior_mean(self) -> float:
        if self.trace.size == 0:
            return float('nan')
        return float(np.mean(self.trace))

    @property
    def posterior_sd(self) -> float:
        if self.trace.size == 0:
            return float('nan')
        return float(np.std(self.trace))


# ═══════════════════════════════════════════════════════════════
# Proposal
# ═══════════════════════════════════════════════════════════════

def truncated_normal_proposal(current: float,
                              proposal_sd: float,
                              rng: np.random.Generator) -> float:
    """Draw from Normal(current, proposal_sd) truncated to [0, 1]."""
    a = (0.0 - current) / proposal_sd
    b = (1.0 - current) / proposal_sd
    proposal = stats.truncnorm.rvs(a, b, loc=current, scale=proposal_sd,
                                   random_state=rng)
    # loc + scale * b can round a hair past the bound
    return float(np.clip(proposal, 0.0, 1.0))


# ═══════════════════════════════════════════════════════════════
# Sampler
# ═══════════════════════════════════════════════════════════════

class MetropolisHastingsSampler:
    """Single-chain Metropolis-Hastings over θ ∈ [0, 1].

    The sampler holds no random state of its own: every run draws from the
    generator it is given (or a fresh one seeded from the config), so two
    runs with the same seed produce identical traces and independent chains
    can be run side by side.
    """

    def __init__(self,
                 log_prior: LogDensity,
                 log_likelihood: LogDensity,
                 config: Optional[SamplerConfig] = None):
        """
        Args:
            log_prior: θ -> log p(θ)
            log_likelihood: θ -> log L(θ | y)
            config: Sampler configuration (defaults if None)
        """
        if log_prior is None or not callable(log_prior):
            raise ConfigurationError(f"log_prior must be callable, got {log_prior!r}")
        if log_likelihood is None or not callable(log_likelihood):
            raise ConfigurationError(
                f"log_likelihood must be callable, got {log_likelihood!r}")

        self.config = config or SamplerConfig()
        self.config.validate()

        self.log_prior = log_prior
        self.log_likelihood = log_likelihood

    def log_posterior(self, theta: float) -> float:
        """Unnormalized log posterior: log p(θ) + log L(θ | y)."""
        return float(self.log_prior(theta)) + float(self.log_likelihood(theta))

    @staticmethod
    def _ratio(proposal_lp: float, current_lp: float) -> float:
        if proposal_lp == current_lp:
            return 1.0
        with np.errstate(invalid='ignore', over='ignore'):
            return float(np.exp(proposal_lp - current_lp))

    def acceptance_ratio(self, proposal: float, current: float) -> float:
        """exp(log π(proposal) − log π(current)).

        Equal log posteriors (including proposal == current) give exactly 1.
        """
        return self._ratio(self.log_posterior(proposal), self.log_posterior(current))

    def propose(self, current: float, rng: np.random.Generator) -> float:
        return truncated_normal_proposal(current, self.config.proposal_sd, rng)

    def run(self, rng: Optional[np.random.Generator] = None) -> SamplerResult:
        """Run the chain for exactly `config.iterations` steps.

        Args:
            rng: Generator to draw from; a fresh `default_rng(config.seed)`
                 is used when None

        Returns:
            SamplerResult with a trace of length `config.iterations`
        """
        cfg = self.config
        if rng is None:
            rng = np.random.default_rng(cfg.seed)

        if cfg.verbose:
            print(f"[MCMC] Running {cfg.iterations} iterations "
                  f"(proposal sd = {cfg.proposal_sd})")

        current = float(rng.uniform(0.0, 1.0))
        initial_state = current
        current_lp = self.log_posterior(current)

        trace = []
        n_accepted = 0

        steps = range(cfg.iterations)
        if cfg.progressbar:
            steps = tqdm(steps, desc='MCMC', unit='it')

        for _ in steps:
            proposal = self.propose(current, rng)
            proposal_lp = self.log_posterior(proposal)
            ratio = self._ratio(proposal_lp, current_lp)

            if rng.uniform(0.0, 1.0) < ratio:
                current, current_lp = proposal, proposal_lp
                n_accepted += 1

            trace.append(current)

        result = SamplerResult(
            trace=np.asarray(trace, dtype=float),
            n_accepted=n_accepted,
            initial_state=initial_state,
            config=cfg,
        )

        if cfg.verbose:
            print(f"[MCMC] Acceptance rate: {result.acceptance_rate:.1%}")
            if result.iterations:
                print(f"[MCMC] Posterior mean: {result.posterior_mean:.4f} "
                      f"(sd {result.posterior_sd:.4f})")

        if result.iterations >= 100 and result.acceptance_rate < cfg.min_acceptance_rate:
            warnings.warn(
                f"[MCMC] Low acceptance rate ({result.acceptance_rate:.1%}); "
                f"consider a smaller proposal_sd than {cfg.proposal_sd}")

        return result


# ═══════════════════════════════════════════════════════════════
# Library entry point
# ═══════════════════════════════════════════════════════════════

def run_sampler(observations: Sequence[int],
                log_prior: LogDensity,
                iterations: int,
                proposal_sd: float,
                seed: Optional[int] = None,
                log_likelihood: Optional[LogDensity] = None,
                rng: Optional[np.random.Generator] = None,
                verbose: bool = False) -> np.ndarray:
    """Sample the posterior of a coin's success probability.

    Args:
        observations: Sequence of 0/1 outcomes
        log_prior: θ -> log p(θ)
        iterations: Exact number of samples to return
        proposal_sd: Scale of the truncated-normal proposal
        seed: Seed for the generator (ignored when `rng` is given)
        log_likelihood: Override for the Bernoulli log-likelihood of `observations`
        rng: Explicit generator, e.g. one of several independent chains
        verbose: Print [MCMC] progress lines

    Returns:
        Array of `iterations` samples in [0, 1]
    """
    if log_likelihood is None:
        log_likelihood = make_log_likelihood(observations)
    else:
        as_observations(observations)

    config = SamplerConfig(
        iterations=iterations,
        proposal_sd=proposal_sd,
        seed=seed,
        verbose=verbose,
    )
    sampler = MetropolisHastingsSampler(log_prior, log_likelihood, config)
    return sampler.run(rng=rng).trace


# ═══════════════════════════════════════════════════════════════
# Persistence
# ═══════════════════════════════════════════════════════════════

def save_trace(result: SamplerResult, filepath: str):
    """Save a chain to JSON."""
    payload = {
        'trace': result.trace.tolist(),
        'n_accepted': result.n_accepted,
        'initial_state': result.initial_state,
        'config': asdict(result.config),
    }
    with open(filepath, 'w') as f:
        json.dump(payload, f, indent=2)
    if result.config.verbose:
        print(f"[MCMC] Trace saved to {filepath}")


def load_trace(filepath: str) -> SamplerResult:
    """Load a chain saved with `save_trace`."""
    with open(Path(filepath)) as f:
        payload = json.load(f)

    return SamplerResult(
        trace=np.asarray(payload['trace'], dtype=float),
        n_accepted=int(payload['n_accepted']),
        initial_state=float(payload['initial_state']),
        config=SamplerConfig(**payload['config']),
    )
