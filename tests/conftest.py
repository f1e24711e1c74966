"""Shared fixtures for tfscan tests."""

import numpy as np
import pytest

from tfscan.models.background import Background
from tfscan.models.pwm import PWM


@pytest.fixture
def uniform_bg():
    return Background.uniform()


@pytest.fixture
def ac_pwm():
    """Two-row motif matching exactly "AC"."""
    return PWM([[1, 0, 0, 0], [0, 1, 0, 0]], name="AC")


@pytest.fixture
def one_hot_pwm():
    """Factory for motifs that match a single site exactly."""
    def make(site, name=None):
        rows = [[1.0 if b == base else 0.0 for b in "ACGT"] for base in site]
        return PWM(rows, name=name or site)
    return make


@pytest.fixture
def rng():
    return np.random.RandomState(7)
