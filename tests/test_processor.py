"""Test the Processor contract: every primitive is interchangeable in a chain.

Run: uv run pytest tests/test_processor.py
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tapline import (
    Biquad, Chain, LeakyIntegrator, LinearDelay, Lowpass, OnePole, Processor, TappedDelayLine,
)
from tapline.params import SR


def make_stages():
    return [
        TappedDelayLine(10, 64),
        Lowpass(SR, 2000.0),
        OnePole(0.5),
        LeakyIntegrator(),
        LinearDelay(3.5, 16),
    ]


@pytest.mark.parametrize("stage", make_stages(), ids=lambda s: type(s).__name__)
def test_contract(stage):
    assert isinstance(stage, Processor)
    x = np.random.default_rng(6).standard_normal(256)
    y = stage.process_block(x)
    assert len(y) == len(x)
    assert y.dtype == stage.dtype
    assert stage.last_out() == y[-1]
    stage.clear()
    assert stage.last_out() == 0.0


def test_default_process_block():
    """The base-class loop works for a processor without a JIT kernel."""

    class Gain(Processor):
        dtype = np.dtype(np.float64)

        def __init__(self):
            self.y = 0.0

        def process(self, sample):
            self.y = 2.0 * sample
            return self.y

        def last_out(self):
            return self.y

        def clear(self):
            self.y = 0.0

    assert np.array_equal(Gain().process_block([1.0, -0.5]), [2.0, -1.0])


def test_chain_matches_manual_series():
    x = np.random.default_rng(12).standard_normal(500)
    chain = Chain(*make_stages())
    manual = make_stages()

    expected = []
    for s in x:
        for stage in manual:
            s = stage.process(s)
        expected.append(s)

    assert np.allclose([chain.process(s) for s in x], expected)
    assert chain.last_out() == pytest.approx(expected[-1])

    chain.clear()
    fresh = Chain(*make_stages())
    assert np.allclose(chain.process_block(x), fresh.process_block(x))


def test_chain_delay_then_filter():
    chain = Chain(TappedDelayLine(4, 8), Biquad(0.5, 0.5, 0.0, 0.0, 0.0))
    out = chain.process_block([1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
    assert list(out) == [0.0, 0.0, 0.0, 0.0, 0.5, 0.5, 0.0]


def test_empty_chain():
    with pytest.raises(ValueError):
        Chain()


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
