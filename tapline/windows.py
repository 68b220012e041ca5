"""Window functions: symmetric, generated one sample at a time.

Each window is an iterator over `size` floats (so it can feed a per-sample
pipeline) and knows its length up front. `window(name, size)` collects one
into a numpy array.
"""

import math

import numpy as np


class _WindowIter:
    """Iterator base: subclasses supply _generate(index)."""

    def __init__(self, size: int):
        self.size = max(int(size), 0)
        self.index = 0

    def __iter__(self):
        return self

    def __next__(self) -> float:
        if self.index >= self.size:
            raise StopIteration
        if self.size == 1:
            sample = 1.0
        else:
            sample = self._generate(self.index)
        self.index += 1
        return sample

    def __len__(self):
        return self.size

    def _phase(self, index: int) -> float:
        return 2.0 * math.pi * index / (self.size - 1)


class BartlettIter(_WindowIter):
    """Triangular window with zero end points: 1 - |(n - a) / a|, a = (N - 1) / 2."""

    def _generate(self, index):
        alpha = (self.size - 1) / 2.0
        return 1.0 - abs((index - alpha) / alpha)


class HannIter(_WindowIter):
    def _generate(self, index):
        return 0.5 - 0.5 * math.cos(self._phase(index))


class HammingIter(_WindowIter):
    def _generate(self, index):
        return 0.54 - 0.46 * math.cos(self._phase(index))


class BlackmanIter(_WindowIter):
    def _generate(self, index):
        phase = self._phase(index)
        return 0.42 - 0.5 * math.cos(phase) + 0.08 * math.cos(2.0 * phase)


WINDOW_TYPES = {
    "bartlett": BartlettIter,
    "hann": HannIter,
    "hamming": HammingIter,
    "blackman": BlackmanIter,
}


def window(name: str, size: int, dtype=np.float64) -> np.ndarray:
    """Collect the named window into an array."""
    if name not in WINDOW_TYPES:
        raise ValueError(f"Unknown window type '{name}'. Options: {list(WINDOW_TYPES.keys())}")
    it = WINDOW_TYPES[name](size)
    return np.fromiter(it, dtype=dtype, count=len(it))
