"""Test the leaky integrator: alpha gating, memory, step response.

Run: uv run pytest tests/test_leaky_integrator.py
"""

import os
import sys

import numpy as np
import pytest
from scipy.signal import lfilter

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tapline.leaky_integrator import LeakyIntegrator


def test_new():
    integrator = LeakyIntegrator()
    assert integrator.last_out() == 0.0
    assert integrator.get_alpha() == 0.0
    # alpha=0 leaves the signal alone
    assert integrator.process(0.3) == 0.3


def test_alpha_range():
    integrator = LeakyIntegrator()
    integrator.set_alpha(0.99)
    assert integrator.get_alpha() == pytest.approx(0.99)

    # only 0 <= alpha < 1 is accepted
    integrator.set_alpha(1.0)
    assert integrator.get_alpha() == pytest.approx(0.99)
    integrator.set_alpha(-0.01)
    assert integrator.get_alpha() == pytest.approx(0.99)
    integrator.set_alpha(0.0)
    assert integrator.get_alpha() == 0.0


def test_memory():
    integrator = LeakyIntegrator()
    integrator.set_alpha(0.5)
    assert integrator.process(1.0) == 0.5
    assert integrator.last_out() == 0.5

    integrator.clear()
    assert integrator.last_out() == 0.0
    assert integrator.process(1.0) == 0.5


def test_step_response():
    integrator = LeakyIntegrator()
    integrator.set_alpha(0.5)
    expected = [0.5, 0.75, 0.875, 0.9375, 0.96875]
    assert [integrator.process(1.0) for _ in expected] == expected


def test_block_matches_one_pole_equivalent():
    """Same as a one-pole with b0 = 1 - alpha, a1 = -alpha."""
    alpha = 0.95
    x = np.random.default_rng(8).standard_normal(2000)
    integrator = LeakyIntegrator()
    integrator.set_alpha(alpha)
    y = integrator.process_block(x)
    assert np.allclose(y, lfilter([1.0 - alpha], [1.0, -alpha], x))
    assert integrator.last_out() == y[-1]


def test_float32():
    integrator = LeakyIntegrator(dtype=np.float32)
    integrator.set_alpha(0.5)
    assert isinstance(integrator.process(1.0), np.float32)
    assert integrator.process_block(np.ones(4)).dtype == np.float32


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
