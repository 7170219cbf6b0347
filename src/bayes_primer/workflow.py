"""
Complete primer walkthrough: coin flips -> MCMC -> exact posterior -> GLMs

Runs the two analyses of the primer end to end and prints a narrated
report:
1. Coin flips: Metropolis-Hastings under an uninformative and an informative
   prior, checked against the conjugate Beta posterior
2. Ecological counts: frequentist vs Bayesian Poisson GLM, then a presence
   model with complete separation

Usage:
    python -m bayes_primer.workflow            # 10 flips
    python -m bayes_primer.workflow 50         # 50 flips
"""
import sys
import warnings
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Optional, Sequence
from statsmodels.tools.sm_exceptions import PerfectSeparationError

from .coin import as_observations, generate_observations, make_log_likelihood
from .config import GLMConfig, SamplerConfig
from .conjugate import BetaPosterior
from .glm import (PYMC_AVAILABLE, compare_glm_fits, detect_complete_separation,
                  fit_bayesian_glm, fit_frequentist_glm, simulate_separated_presence,
                  simulate_species_counts)
from .priors import build_log_prior, get_default_priors
from .sampler import MetropolisHastingsSampler


def run_coin_flip_analysis(n_flips: int = 10,
                           p_true: float = 0.7,
                           iterations: int = 10000,
                           proposal_sd: float = 0.1,
                           seed: int = 42,
                           observations: Optional[Sequence[int]] = None,
                           verbose: bool = True,
                           plot: bool = False,
                           output_dir: str = '.') -> Dict:
    """Sample the coin's success probability under each default prior.

    One generator drives the whole run: the observations are drawn first,
    then each chain in turn, so the same seed reproduces everything.

    Args:
        n_flips: Number of coin flips to simulate
        p_true: True success probability
        iterations: Samples per chain
        proposal_sd: Proposal scale
        seed: Seed for the run's generator
        observations: Use these flips instead of simulating
        verbose: Print the narrated report
        plot: Save one prior/posterior figure per prior to `output_dir`
        output_dir: Directory for figures

    Returns:
        dict with 'observations', 'results', 'exact', 'summary'
    """
    rng = np.random.default_rng(seed)

    if verbose:
        print("\n" + "="*70)
        print("COIN FLIPS: METROPOLIS-HASTINGS")
        print("="*70)

    if observations is None:
        obs = generate_observations(n_flips, p_true, rng=rng)
    else:
        obs = as_observations(observations)
    log_likelihood = make_log_likelihood(obs)

    if verbose:
        print(f"\n[Workflow] {obs.size} flips, {int(obs.sum())} successes")

    config = SamplerConfig(iterations=iterations, proposal_sd=proposal_sd, seed=seed)
    results = {}
    exact = {}
    rows = []

    for spec in get_default_priors():
        if verbose:
            print(f"\n[Workflow] Prior: {spec.name} ({spec.distribution} {spec.params})")

        sampler = MetropolisHastingsSampler(build_log_prior(spec), log_likelihood, config)
        result = sampler.run(rng=rng)
        posterior = BetaPosterior.from_prior_spec(spec).update(obs)
        lower, upper = posterior.credible_interval(0.95)

        results[spec.name] = result
        exact[spec.name] = posterior
        rows.append({
            'prior': spec.name,
            'mcmc_mean': result.posterior_mean,
            'mcmc_sd': result.posterior_sd,
            'exact_mean': posterior.mean,
            'exact_sd': posterior.sd,
            'ci_lower': lower,
            'ci_upper': upper,
            'acceptance_rate': result.acceptance_rate,
        })

        if plot:
            from .plotting import plot_prior_posterior
            import matplotlib.pyplot as plt

            path = Path(output_dir) / f"coin_{spec.name}.png"
            ax = plot_prior_posterior(BetaPosterior.from_prior_spec(spec), posterior,
                                      reference=p_true if observations is None else None,
                                      trace=result.trace, title=f"{spec.name} prior",
                                      save_path=str(path))
            plt.close(ax.figure)

    summary = pd.DataFrame(rows)

    if verbose:
        print("\n" + "="*70)
        print("COIN FLIP REPORT")
        print("="*70)
        print(f"{'Prior':<15} {'MCMC mean':>10} {'Exact mean':>11} {'95% CI':>20} {'Accept':>8}")
        print("-" * 70)
        for row in rows:
            print(f"{row['prior']:<15} {row['mcmc_mean']:>10.4f} {row['exact_mean']:>11.4f} "
                  f"[{row['ci_lower']:>7.4f}, {row['ci_upper']:>7.4f}] "
                  f"{row['acceptance_rate']:>7.1%}")

    return {
        'observations': obs,
        'results': results,
        'exact': exact,
        'summary': summary,
    }


def run_glm_analysis(n_sites: int = 200,
                     seed: int = 42,
                     config: Optional[GLMConfig] = None,
                     fit_bayesian: bool = True,
                     include_separation: bool = True,
                     verbose: bool = True) -> Dict:
    """Frequentist vs Bayesian GLMs on simulated species counts.

    Args:
        n_sites: Survey sites in the count data set
        seed: Seed for the simulated data and the PyMC sampler
        config: Poisson GLM configuration (defaults if None)
        fit_bayesian: Fit the PyMC models (skipped if PyMC is not installed)
        include_separation: Also run the complete-separation presence model
        verbose: Print the narrated report

    Returns:
        dict with 'data', 'frequentist', 'bayesian', 'comparison', 'separation'
    """
    config = config or GLMConfig(seed=seed)
    if verbose:
        print("\n" + "="*70)
        print("ECOLOGICAL COUNTS: FREQUENTIST VS BAYESIAN GLM")
        print("="*70)

    data = simulate_species_counts(n_sites=n_sites, seed=seed)
    if verbose:
        print(f"\n[Workflow] {n_sites} sites, mean count {data['count'].mean():.2f}, "
              f"species present at {data['present'].mean():.0%} of sites")

    freq = fit_frequentist_glm(data, config)

    run_bayes = fit_bayesian and PYMC_AVAILABLE
    if verbose and fit_bayesian and not PYMC_AVAILABLE:
        print("  ⚠ PyMC not installed, skipping Bayesian fits "
              "(pip install bayes-primer[bayesian])")

    idata = None
    comparison = None
    if run_bayes:
        idata = fit_bayesian_glm(data, config)
        comparison = compare_glm_fits(freq, idata, config.credible_interval, config.rhat_threshold)

    if verbose:
        print(f"\n{'Term':<15} {'MLE':>10} {'SE':>10}", end="")
        if comparison is not None:
            print(f" {'Post. mean':>11} {'Post. sd':>10}", end="")
        print()
        print("-" * 60)
        for i, term in enumerate(freq.params.index):
            print(f"{term:<15} {freq.params.iloc[i]:>10.4f} {freq.bse.iloc[i]:>10.4f}", end="")
            if comparison is not None:
                print(f" {comparison['posterior_mean'].iloc[i]:>11.4f} "
                      f"{comparison['posterior_sd'].iloc[i]:>10.4f}", end="")
            print()

    separation = None
    if include_separation:
        separation = _run_separation_example(seed, config, run_bayes, verbose)

    return {
        'data': data,
        'frequentist': freq,
        'bayesian': idata,
        'comparison': comparison,
        'separation': separation,
    }


def _run_separation_example(seed: int, base: GLMConfig, run_bayes: bool, verbose: bool) -> Dict:
    config = GLMConfig(
        family='binomial',
        formula='present ~ forest_z',
        prior_sigma=base.prior_sigma,
        n_draws=base.n_draws,
        n_tune=base.n_tune,
        n_chains=base.n_chains,
        cores=base.cores,
        target_accept=base.target_accept,
        seed=base.seed,
        progressbar=base.progressbar,
        credible_interval=base.credible_interval,
        rhat_threshold=base.rhat_threshold,
    )
    data = simulate_separated_presence(seed=seed)
    separated = detect_complete_separation(data['forest_z'], data['present'])

    if verbose:
        print(f"\n[Workflow] Presence model, complete separation detected: {separated}")

    freq = None
    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        try:
            freq = fit_frequentist_glm(data, config)
        except PerfectSeparationError as e:
            if verbose:
                print(f"  ⚠ Maximum likelihood failed: {e}")

    idata = fit_bayesian_glm(data, config) if run_bayes else None

    if verbose:
        if freq is not None:
            print(f"  MLE slope:            {freq.params['forest_z']:.3f} "
                  f"(SE {freq.bse['forest_z']:.3f})")
        if idata is not None:
            slope = np.asarray(idata.posterior['beta'].sel(term='forest_z').values)
            print(f"  Posterior mean slope: {slope.mean():.3f} (sd {slope.std():.3f})")

    return {
        'data': data,
        'separated': separated,
        'frequentist': freq,
        'bayesian': idata,
    }


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    n_flips = int(argv[0]) if argv else 10

    coin = run_coin_flip_analysis(n_flips=n_flips)
    glm = run_glm_analysis()
    return coin, glm


if __name__ == '__main__':
    main()
