"""Leaky integrator: one-pole smoother used to average a signal.

A one-pole filter whose input gain b0 and feedback gain a1 are complements
(a1 = 1 - b0), so the recurrence collapses to a single gain, alpha:

    y[n] = x[n] + alpha * (y[n-1] - x[n])

alpha=0: passthrough. alpha close to 1: long averaging window.
"""

import numpy as np

from tapline.kernels import as_block, leaky_block
from tapline.params import DEFAULT_DTYPE
from tapline.processor import Processor
from tapline.samples import sample_dtype


class LeakyIntegrator(Processor):

    def __init__(self, dtype=DEFAULT_DTYPE):
        self.dtype = sample_dtype(dtype)
        self._t = self.dtype.type
        self.alpha = self._t(0)
        self.y1 = self._t(0)

    def get_alpha(self) -> float:
        return self.alpha

    def set_alpha(self, gain: float):
        """Set alpha, where 0 <= alpha < 1. Anything else leaves alpha unchanged."""
        if 0.0 <= gain < 1.0:
            self.alpha = self._t(gain)

    def process(self, sample: float) -> float:
        x = self._t(sample)
        self.y1 = x + self.alpha * (self.y1 - x)
        return self.y1

    def process_block(self, samples) -> np.ndarray:
        x = as_block(samples, self.dtype)
        out = np.empty(len(x), dtype=self.dtype)
        state = np.array([self.y1], dtype=self.dtype)
        leaky_block(x, out, self.alpha, state)
        self.y1 = self._t(state[0])
        return out

    def last_out(self) -> float:
        return self.y1

    def clear(self):
        self.y1 = self._t(0)
