"""
Bayes Primer — Plotting
=======================
Figures for the primer: MCMC trace histograms with a reference line,
prior/posterior density overlays, and the GLM coefficient comparison.

Every function draws onto `ax` (a new figure if None), optionally saves a
PNG to `save_path`, and returns the Axes.

License: MIT
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Optional

from .conjugate import BetaPosterior

sns.set_style('whitegrid')


def _axes(ax):
    if ax is None:
        _, ax = plt.subplots(figsize=(7, 4))
    return ax


def _save(ax, save_path: Optional[str]):
    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')


def plot_trace_histogram(trace: np.ndarray,
                         reference: Optional[float] = None,
                         ax=None,
                         bins: int = 50,
                         label: Optional[str] = None,
                         color: str = 'steelblue',
                         save_path: Optional[str] = None):
    """Density histogram of a sample trace.

    Args:
        trace: MCMC samples
        reference: Draw a dashed vertical line here (e.g. the true θ)
        ax: Axes to draw on
        bins: Number of histogram bins
        label: Legend label for the histogram
        color: Histogram color
        save_path: Write the figure to this path
    """
    ax = _axes(ax)
    sns.histplot(np.asarray(trace), bins=bins, binrange=(0.0, 1.0), stat='density',
                 color=color, alpha=0.5, label=label, ax=ax)
    if reference is not None:
        ax.axvline(reference, color='red', linestyle='--', linewidth=1.5,
                   label=f'reference = {reference:.3f}')

    ax.set_xlim(0.0, 1.0)
    ax.set_xlabel('θ (probability of success)')
    ax.set_ylabel('density')
    if label is not None or reference is not None:
        ax.legend()
    _save(ax, save_path)
    return ax


def plot_prior_posterior(prior: BetaPosterior,
                         posterior: BetaPosterior,
                         ax=None,
                         reference: Optional[float] = None,
                         trace: Optional[np.ndarray] = None,
                         title: Optional[str] = None,
                         save_path: Optional[str] = None):
    """Overlay prior and posterior densities, optionally with an MCMC histogram."""
    ax = _axes(ax)
    grid = np.linspace(0.0, 1.0, 501)

    if trace is not None:
        sns.histplot(np.asarray(trace), bins=50, binrange=(0.0, 1.0), stat='density',
                     color='grey', alpha=0.3, label='MCMC samples', ax=ax)

    ax.plot(grid, prior.pdf(grid), color='tab:blue', linestyle=':', label=f'prior {prior}')
    ax.plot(grid, posterior.pdf(grid), color='tab:orange', label=f'posterior {posterior}')
    if reference is not None:
        ax.axvline(reference, color='red', linestyle='--', linewidth=1.0,
                   label=f'true θ = {reference:.3f}')

    ax.set_xlim(0.0, 1.0)
    ax.set_xlabel('θ (probability of success)')
    ax.set_ylabel('density')
    if title:
        ax.set_title(title)
    ax.legend()
    _save(ax, save_path)
    return ax


def plot_glm_comparison(table: pd.DataFrame,
                        ax=None,
                        z: float = 1.96,
                        save_path: Optional[str] = None):
    """Point estimates and intervals per term: MLE ± z·SE vs posterior credible interval.

    Args:
        table: Output of `compare_glm_fits`
    """
    ax = _axes(ax)
    positions = np.arange(len(table))
    offset = 0.15

    ax.errorbar(table['mle'], positions - offset, xerr=z * table['std_err'],
                fmt='o', color='tab:blue', capsize=3, label='maximum likelihood')
    ax.errorbar(table['posterior_mean'], positions + offset,
                xerr=[table['posterior_mean'] - table['ci_lower'],
                      table['ci_upper'] - table['posterior_mean']],
                fmt='s', color='tab:orange', capsize=3, label='Bayesian posterior')

    ax.axvline(0.0, color='black', linewidth=0.8)
    ax.set_yticks(positions)
    ax.set_yticklabels(table['term'])
    ax.set_xlabel('coefficient')
    ax.legend()
    _save(ax, save_path)
    return ax
