"""Numba block loops: the per-sample recurrences, JIT-compiled over whole buffers.

All state lives in flat numpy arrays owned by the Python objects; the kernels
read it, run the loop, and write the updated cursors/memory back in place.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def delay_block(storage, x, out, cursors):
    """Tapped delay line. cursors = [write, read], updated in place."""
    n = len(storage)
    wi = cursors[0]
    ri = cursors[1]
    for i in range(len(x)):
        storage[wi] = x[i]
        wi = (wi + 1) % n
        out[i] = storage[ri]
        ri = (ri + 1) % n
    cursors[0] = wi
    cursors[1] = ri


@njit(cache=True)
def linear_delay_block(storage, x, out, cursors, frac):
    """Fractional delay: blend the read slot with the one just older than it."""
    n = len(storage)
    wi = cursors[0]
    ri = cursors[1]
    for i in range(len(x)):
        storage[wi] = x[i]
        wi = (wi + 1) % n
        s0 = storage[ri]
        s1 = storage[(ri - 1) % n]
        out[i] = s0 + frac * (s1 - s0)
        ri = (ri + 1) % n
    cursors[0] = wi
    cursors[1] = ri


@njit(cache=True)
def biquad_block(x, out, coeffs, state):
    """Direct Form 1 biquad. coeffs = [b0, b1, b2, a1, a2], state = [x1, x2, y1, y2]."""
    b0 = coeffs[0]
    b1 = coeffs[1]
    b2 = coeffs[2]
    a1 = coeffs[3]
    a2 = coeffs[4]
    x1 = state[0]
    x2 = state[1]
    y1 = state[2]
    y2 = state[3]
    for i in range(len(x)):
        y = b0 * x[i] + b1 * x1 + b2 * x2 - a1 * y1 - a2 * y2
        x2 = x1
        x1 = x[i]
        y2 = y1
        y1 = y
        out[i] = y
    state[0] = x1
    state[1] = x2
    state[2] = y1
    state[3] = y2


@njit(cache=True)
def leaky_block(x, out, alpha, state):
    """Leaky integrator: y[n] = x[n] + alpha * (y[n-1] - x[n])."""
    y1 = state[0]
    for i in range(len(x)):
        y1 = x[i] + alpha * (y1 - x[i])
        out[i] = y1
    state[0] = y1


def as_block(samples, dtype) -> np.ndarray:
    """Contiguous copy-if-needed of `samples` in the processor's dtype."""
    return np.ascontiguousarray(samples, dtype=dtype)
