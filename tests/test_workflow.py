"""
Integration tests for the primer walkthrough
"""

import pytest
import numpy as np

from bayes_primer.config import GLMConfig
from bayes_primer.glm import PYMC_AVAILABLE
from bayes_primer.workflow import run_coin_flip_analysis, run_glm_analysis


class TestCoinFlipAnalysis:
    """run_coin_flip_analysis end to end."""

    def test_results_per_prior(self):
        out = run_coin_flip_analysis(n_flips=20, iterations=500, verbose=False)

        assert set(out['results']) == {'uninformative', 'informative'}
        assert all(r.iterations == 500 for r in out['results'].values())
        assert list(out['summary']['prior']) == ['uninformative', 'informative']
        assert out['observations'].size == 20

    def test_reproducible(self):
        a = run_coin_flip_analysis(n_flips=15, iterations=300, seed=3, verbose=False)
        b = run_coin_flip_analysis(n_flips=15, iterations=300, seed=3, verbose=False)
        np.testing.assert_array_equal(a['observations'], b['observations'])
        for name in a['results']:
            np.testing.assert_array_equal(a['results'][name].trace, b['results'][name].trace)

    def test_explicit_observations_and_exact_posteriors(self, all_heads):
        out = run_coin_flip_analysis(observations=all_heads, iterations=200, verbose=False)
        assert out['exact']['uninformative'].alpha == 11.0
        assert out['exact']['informative'].mean == pytest.approx(0.6)

    @pytest.mark.slow
    def test_mcmc_tracks_exact_informative_mean(self):
        out = run_coin_flip_analysis(n_flips=30, iterations=10000, verbose=False)
        row = out['summary'].set_index('prior').loc['informative']
        assert row['mcmc_mean'] == pytest.approx(row['exact_mean'], abs=0.03)

    def test_report_and_figures(self, capsys, tmp_path):
        run_coin_flip_analysis(n_flips=10, iterations=200, verbose=True,
                               plot=True, output_dir=str(tmp_path))
        out = capsys.readouterr().out

        assert "COIN FLIP REPORT" in out
        assert (tmp_path / "coin_uninformative.png").exists()
        assert (tmp_path / "coin_informative.png").exists()


class TestGLMAnalysis:
    """run_glm_analysis without PyMC sampling."""

    def test_frequentist_only(self):
        out = run_glm_analysis(n_sites=150, fit_bayesian=False, verbose=False)

        assert out['bayesian'] is None
        assert out['comparison'] is None
        assert out['separation']['separated']
        assert list(out['frequentist'].params.index) == ['Intercept', 'forest_z', 'elevation_z']

    def test_report(self, capsys):
        run_glm_analysis(n_sites=100, fit_bayesian=False, include_separation=False)
        out = capsys.readouterr().out
        assert "FREQUENTIST VS BAYESIAN GLM" in out
        assert "forest_z" in out

    @pytest.mark.skipif(not PYMC_AVAILABLE, reason="PyMC not installed")
    @pytest.mark.slow
    def test_with_bayesian_fits(self):
        config = GLMConfig(n_draws=200, n_tune=200, n_chains=1, seed=0)
        out = run_glm_analysis(n_sites=150, config=config, verbose=False)

        assert out['comparison'] is not None
        assert len(out['comparison']) == 3
        assert out['separation']['bayesian'] is not None


def test_package_is_installed():
    """Tests run against the installed distribution (pip install -e .[dev])."""
    from importlib.metadata import version
    import bayes_primer

    assert version('bayes-primer') == bayes_primer.__version__
