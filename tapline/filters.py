"""Filters: one-pole, one-zero, two-pole, two-zero, biquad, and RBJ cookbook designs.

Every filter here is the same second-order difference equation (Direct Form 1)
with some coefficients pinned to zero:

    y[n] = b0*x[n] + b1*x[n-1] + b2*x[n-2] - a1*y[n-1] - a2*y[n-2]

Coefficients are normalized (a0 = 1). Each class only exposes the setters that
make sense for its topology.
"""

import math
from abc import abstractmethod

import numpy as np

from tapline.kernels import as_block, biquad_block
from tapline.params import DEFAULT_DTYPE
from tapline.processor import Processor
from tapline.samples import sample_dtype

BUTTERWORTH_Q = 1.0 / math.sqrt(2.0)


class _DirectForm(Processor):
    """Shared state and evaluation: 5 coefficients, 4 memory slots."""

    def __init__(self, dtype=DEFAULT_DTYPE):
        self.dtype = sample_dtype(dtype)
        self._t = self.dtype.type
        self._set(1.0, 0.0, 0.0, 0.0, 0.0)
        self.clear()

    def _set(self, b0, b1, b2, a1, a2):
        t = self._t
        self.b0 = t(b0)
        self.b1 = t(b1)
        self.b2 = t(b2)
        self.a1 = t(a1)
        self.a2 = t(a2)

    def get_coefficients(self) -> tuple:
        """(b0, b1, b2, a1, a2)"""
        return (self.b0, self.b1, self.b2, self.a1, self.a2)

    def process(self, sample: float) -> float:
        x = self._t(sample)
        y = self.b0 * x + self.b1 * self.x1 + self.b2 * self.x2 \
            - self.a1 * self.y1 - self.a2 * self.y2
        self.x2 = self.x1
        self.x1 = x
        self.y2 = self.y1
        self.y1 = y
        return y

    def process_block(self, samples) -> np.ndarray:
        x = as_block(samples, self.dtype)
        out = np.empty(len(x), dtype=self.dtype)
        coeffs = np.array(self.get_coefficients(), dtype=self.dtype)
        state = np.array([self.x1, self.x2, self.y1, self.y2], dtype=self.dtype)
        biquad_block(x, out, coeffs, state)
        self.x1, self.x2, self.y1, self.y2 = (self._t(s) for s in state)
        return out

    def last_out(self) -> float:
        return self.y1

    def clear(self):
        z = self._t(0)
        self.x1 = self.x2 = self.y1 = self.y2 = z


class Biquad(_DirectForm):
    """Generic two-pole, two-zero filter.

    Use the RBJ classes below (Lowpass, Highpass, BandPass, BandStop) to
    derive coefficients from frequency and Q.
    """

    def __init__(self, b0=1.0, b1=0.0, b2=0.0, a1=0.0, a2=0.0, dtype=DEFAULT_DTYPE):
        super().__init__(dtype)
        self._set(b0, b1, b2, a1, a2)

    def set_coefficients(self, b0, b1, b2, a1, a2):
        self._set(b0, b1, b2, a1, a2)


class OnePole(_DirectForm):
    """One-pole filter. y[n] = b0*x[n] - a1*y[n-1]

    pole close to +1: lowpass; close to -1: highpass. set_pole keeps the peak
    gain at unity.
    """

    def __init__(self, pole: float = 0.9, dtype=DEFAULT_DTYPE):
        super().__init__(dtype)
        self.set_pole(pole)

    def set_pole(self, pole: float):
        self.set_coefficients(1.0 - abs(pole), -pole)

    def set_coefficients(self, b0, a1):
        self._set(b0, 0.0, 0.0, a1, 0.0)


class OneZero(_DirectForm):
    """One-zero filter. y[n] = b0*x[n] + b1*x[n-1]

    The default zero at -1 is a two-point average (lowpass).
    """

    def __init__(self, zero: float = -1.0, dtype=DEFAULT_DTYPE):
        super().__init__(dtype)
        self.set_zero(zero)

    def set_zero(self, zero: float):
        b0 = 1.0 / (1.0 + abs(zero))
        self.set_coefficients(b0, -zero * b0)

    def set_coefficients(self, b0, b1):
        self._set(b0, b1, 0.0, 0.0, 0.0)


class TwoPole(_DirectForm):
    """Two-pole resonator. y[n] = b0*x[n] - a1*y[n-1] - a2*y[n-2]"""

    def set_resonance(self, frequency: float, radius: float, sample_rate: float,
                      normalize: bool = False):
        """Place a conjugate pole pair at `frequency` with `radius` (0 <= r < 1).

        With normalize=True, b0 is chosen so the gain at `frequency` is unity.
        """
        theta = 2.0 * math.pi * frequency / sample_rate
        a1 = -2.0 * radius * math.cos(theta)
        a2 = radius * radius
        b0 = 1.0
        if normalize:
            real = 1.0 - radius + (a2 - radius) * math.cos(2.0 * theta)
            imag = (a2 - radius) * math.sin(2.0 * theta)
            b0 = math.sqrt(real * real + imag * imag)
        self.set_coefficients(b0, a1, a2)

    def set_coefficients(self, b0, a1, a2):
        self._set(b0, 0.0, 0.0, a1, a2)


class TwoZero(_DirectForm):
    """Two-zero notch. y[n] = b0*x[n] + b1*x[n-1] + b2*x[n-2]"""

    def set_notch(self, frequency: float, radius: float, sample_rate: float):
        """Place a conjugate zero pair at `frequency`; scaled so the peak gain is unity."""
        b1 = -2.0 * radius * math.cos(2.0 * math.pi * frequency / sample_rate)
        b2 = radius * radius
        if b1 > 0.0:
            b0 = 1.0 / (1.0 + b1 + b2)
        else:
            b0 = 1.0 / (1.0 - b1 + b2)
        self.set_coefficients(b0, b1 * b0, b2 * b0)

    def set_coefficients(self, b0, b1, b2):
        self._set(b0, b1, b2, 0.0, 0.0)


# ---------------------------------------------------------------------------
# RBJ cookbook designs
# ---------------------------------------------------------------------------

class _RBJ(_DirectForm):
    """Biquad whose coefficients come from (sample_rate, frequency, q).

    A freshly built filter is a passthrough until coefficients are set.
    Parameters are not validated.
    """

    def __init__(self, sample_rate=None, frequency=None, q=BUTTERWORTH_Q,
                 dtype=DEFAULT_DTYPE):
        super().__init__(dtype)
        if sample_rate is not None and frequency is not None:
            self.set_coefficients(sample_rate, frequency, q)

    def set_coefficients(self, sample_rate: float, frequency: float, q: float):
        """Recompute coefficients and clear the filter memory."""
        w0 = 2.0 * math.pi * frequency / sample_rate
        cos_w0 = math.cos(w0)
        alpha = math.sin(w0) / (2.0 * q)
        b0, b1, b2, a0, a1, a2 = self._design(cos_w0, alpha)
        self._set(b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)
        self.clear()

    @abstractmethod
    def _design(self, cos_w0, alpha):
        """Return unnormalized (b0, b1, b2, a0, a1, a2)."""
        ...


class Lowpass(_RBJ):
    """Lowpass. q=0.707 is Butterworth; higher q adds a resonant peak."""

    def _design(self, cos_w0, alpha):
        b1 = 1.0 - cos_w0
        return b1 / 2.0, b1, b1 / 2.0, 1.0 + alpha, -2.0 * cos_w0, 1.0 - alpha


class Highpass(_RBJ):
    def _design(self, cos_w0, alpha):
        b0 = (1.0 + cos_w0) / 2.0
        return b0, -(1.0 + cos_w0), b0, 1.0 + alpha, -2.0 * cos_w0, 1.0 - alpha


class BandPass(_RBJ):
    """Bandpass with constant 0 dB peak gain."""

    def _design(self, cos_w0, alpha):
        return alpha, 0.0, -alpha, 1.0 + alpha, -2.0 * cos_w0, 1.0 - alpha


class BandStop(_RBJ):
    """Band-stop (notch / band-reject)."""

    def _design(self, cos_w0, alpha):
        b1 = -2.0 * cos_w0
        return 1.0, b1, 1.0, 1.0 + alpha, b1, 1.0 - alpha
