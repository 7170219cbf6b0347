"""
Pytest configuration and fixtures for reproducible testing.

This file provides centralized test configuration including:
- A non-interactive matplotlib backend
- Seeded generators and shared observation sets
"""

import matplotlib
matplotlib.use('Agg')

import pytest
import numpy as np


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running sampling tests")

@pytest.fixture(scope="session", autouse=True)
def set_random_seeds():
    """Seed the legacy global NumPy generator once per session.

    The package itself only draws from explicit generators; this keeps any
    stray np.random use in tests deterministic.
    """
    np.random.seed(42)
    yield

@pytest.fixture
def rng():
    """Fresh seeded generator for each test."""
    return np.random.default_rng(42)

@pytest.fixture
def all_heads():
    """Ten flips, all successes."""
    return [1] * 10

@pytest.fixture
def mixed_flips():
    """Twenty flips, 14 successes."""
    return [1, 0, 1, 1, 1, 0, 1, 1, 0, 1, 1, 1, 0, 1, 1, 0, 1, 0, 1, 1]
