"""Test window generators against scipy.signal.windows (symmetric).

Run: uv run pytest tests/test_windows.py
"""

import os
import sys

import numpy as np
import pytest
from scipy.signal import windows as sp_windows

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tapline.windows import BartlettIter, WINDOW_TYPES, window

BARTLETT_CASES = [
    [0.0, 1.0, 0.0],
    [0.0, 0.5, 1.0, 0.5, 0.0],
    [0.0, 0.4, 0.8, 0.8, 0.4, 0.0],
    [0.0, 1 / 3, 2 / 3, 1.0, 2 / 3, 1 / 3, 0.0],
]


@pytest.mark.parametrize("expected", BARTLETT_CASES)
def test_bartlett_next(expected):
    it = BartlettIter(len(expected))
    for want in expected:
        assert next(it) == pytest.approx(want, abs=1e-12)
    with pytest.raises(StopIteration):
        next(it)


@pytest.mark.parametrize("expected", BARTLETT_CASES)
def test_bartlett_collect_and_len(expected):
    it = BartlettIter(len(expected))
    assert len(it) == len(expected)
    assert np.allclose(list(it), expected)


@pytest.mark.parametrize("name", list(WINDOW_TYPES))
@pytest.mark.parametrize("size", [1, 2, 3, 8, 31, 64])
def test_matches_scipy(name, size):
    ref = sp_windows.get_window(name, size, fftbins=False)
    assert np.allclose(window(name, size), ref, atol=1e-12)


def test_empty_and_dtype():
    assert len(window("hann", 0)) == 0
    assert list(BartlettIter(0)) == []
    assert window("hamming", 16, dtype=np.float32).dtype == np.float32


def test_unknown_window():
    with pytest.raises(ValueError, match="Unknown window type"):
        window("kaiser", 16)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
