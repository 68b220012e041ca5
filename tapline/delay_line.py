"""Time-varying tapped delay line built on a circular buffer.

Usage:
    dl = TappedDelayLine(delay=700, max_delay=5 * SR)
    out = dl.process(sample)       # write, then read `delay` samples back
    dl.set_delay(1200)             # next read jumps to the new offset
    echo = dl.tap_out(300)         # read 300 samples behind the write position
    dl.add_to(0.5 * echo, 900)     # accumulate feedback into history

The buffer holds capacity + 1 slots. The read cursor trails the write cursor by
exactly `delay` slots; taps address history relative to the write cursor and
never touch the read cursor.
"""

import logging

import numpy as np

from tapline.kernels import as_block, delay_block, linear_delay_block
from tapline.params import DEFAULT_DTYPE
from tapline.processor import Processor, TappableDelayLine
from tapline.samples import sample_dtype, zeros

log = logging.getLogger(__name__)


class TappedDelayLine(Processor, TappableDelayLine):
    """Integer delay line with dynamic length, growable capacity, and taps.

    Every length or offset argument is clipped into range instead of raising,
    so the whole interface is safe to call from an audio callback.
    """

    def __init__(self, delay: int, max_delay: int, dtype=DEFAULT_DTYPE):
        self.dtype = sample_dtype(dtype)
        self.storage = zeros(max(int(max_delay), 0) + 1, self.dtype)
        self.write_cursor = 0
        self.read_cursor = 0
        self.delay_length = 0
        self._output = self.dtype.type(0)
        self.set_delay(delay)

    # ------------------------------------------------------------------
    # Length / capacity
    # ------------------------------------------------------------------
    def get_max_delay(self) -> int:
        return len(self.storage) - 1

    def set_max_delay(self, max_delay: int):
        """Grow capacity to `max_delay` samples. Shrinking is ignored.

        The new slots go in at the write cursor, i.e. just older than the
        oldest sample, so everything already written keeps its distance from
        the write cursor and the configured delay still reads the same data.
        """
        extra = int(max_delay) - self.get_max_delay()
        if extra <= 0:
            return
        w = self.write_cursor
        self.storage = np.concatenate(
            (self.storage[:w], zeros(extra, self.dtype), self.storage[w:]))
        if self.read_cursor > w:
            self.read_cursor += extra
        log.debug("delay line capacity grown to %d samples", self.get_max_delay())

    def get_delay(self) -> int:
        return self.delay_length

    def set_delay(self, delay: int):
        """Set the delay in samples, clipped to [0, max_delay].

        Repositions the read cursor immediately: the next output comes from the
        new offset with no smoothing. Crossfading is up to the caller.
        """
        delay = self._clip_delay(int(delay))
        # Python's % already wraps negative differences into [0, len)
        self.read_cursor = (self.write_cursor - delay) % len(self.storage)
        self.delay_length = delay

    def _clip_delay(self, delay):
        max_delay = self.get_max_delay()
        if delay > max_delay or delay < 0:
            clipped = min(max(delay, 0), max_delay)
            log.debug("delay %s clipped to %s (max %d)", delay, clipped, max_delay)
            return clipped
        return delay

    # ------------------------------------------------------------------
    # Processor
    # ------------------------------------------------------------------
    def process(self, sample: float) -> float:
        n = len(self.storage)
        self.storage[self.write_cursor] = sample
        self.write_cursor = (self.write_cursor + 1) % n

        self._output = self.storage[self.read_cursor]
        self.read_cursor = (self.read_cursor + 1) % n
        return self._output

    def process_block(self, samples) -> np.ndarray:
        x = as_block(samples, self.dtype)
        out = np.empty(len(x), dtype=self.dtype)
        cursors = np.array([self.write_cursor, self.read_cursor], dtype=np.int64)
        delay_block(self.storage, x, out, cursors)
        self.write_cursor, self.read_cursor = int(cursors[0]), int(cursors[1])
        if len(out):
            self._output = out[-1]
        return out

    def next_out(self) -> float:
        """The value the next `process` call will return (delay > 0)."""
        return self.storage[self.read_cursor]

    def last_out(self) -> float:
        return self._output

    def clear(self):
        """Forget history. Cursors and delay length are kept."""
        self.storage[:] = 0.0
        self._output = self.dtype.type(0)

    # ------------------------------------------------------------------
    # Taps
    # ------------------------------------------------------------------
    def _tap_index(self, tap_delay: int) -> int:
        # offsets past the capacity would alias onto newer samples
        tap_delay = min(max(int(tap_delay), 0), self.get_max_delay())
        return (self.write_cursor - tap_delay - 1) % len(self.storage)

    def tap_out(self, tap_delay: int) -> float:
        """Sample `tap_delay` steps behind the most recent write (0 = newest)."""
        return self.storage[self._tap_index(tap_delay)]

    def tap_in(self, value: float, tap_delay: int):
        """Overwrite history at `tap_delay`."""
        self.storage[self._tap_index(tap_delay)] = value

    def add_to(self, value: float, tap_delay: int) -> float:
        """Accumulate `value` into history at `tap_delay`; returns the new sum."""
        idx = self._tap_index(tap_delay)
        self.storage[idx] += value
        return self.storage[idx]

    def __repr__(self):
        return (f"{type(self).__name__}(delay={self.get_delay()}, "
                f"max_delay={self.get_max_delay()}, dtype={self.dtype})")


class LinearDelay(TappedDelayLine):
    """Fractional delay line with linear interpolation between adjacent samples.

    The integer part of the delay drives the read cursor exactly like
    TappedDelayLine; the fractional part blends in the next-older sample.
    Delays are clipped to [0, max_delay - 1] so the older sample always exists.
    """

    def __init__(self, delay: float, max_delay: int, dtype=DEFAULT_DTYPE):
        self._delay = 0.0
        self._frac = 0.0
        super().__init__(delay, max_delay, dtype)

    def get_delay(self) -> float:
        return self._delay

    def set_delay(self, delay: float):
        hi = max(self.get_max_delay() - 1, 0)
        delay = float(delay)
        if delay > hi or delay < 0.0:
            clipped = min(max(delay, 0.0), float(hi))
            log.debug("delay %s clipped to %s (max %d)", delay, clipped, hi)
            delay = clipped
        int_delay = int(delay)
        self._delay = delay
        self._frac = delay - int_delay
        self.read_cursor = (self.write_cursor - int_delay) % len(self.storage)
        self.delay_length = int_delay

    def _interpolate(self) -> float:
        s0 = self.storage[self.read_cursor]
        s1 = self.storage[(self.read_cursor - 1) % len(self.storage)]
        return s0 + self.dtype.type(self._frac) * (s1 - s0)

    def process(self, sample: float) -> float:
        n = len(self.storage)
        self.storage[self.write_cursor] = sample
        self.write_cursor = (self.write_cursor + 1) % n

        self._output = self._interpolate()
        self.read_cursor = (self.read_cursor + 1) % n
        return self._output

    def process_block(self, samples) -> np.ndarray:
        x = as_block(samples, self.dtype)
        out = np.empty(len(x), dtype=self.dtype)
        cursors = np.array([self.write_cursor, self.read_cursor], dtype=np.int64)
        linear_delay_block(self.storage, x, out, cursors, self.dtype.type(self._frac))
        self.write_cursor, self.read_cursor = int(cursors[0]), int(cursors[1])
        if len(out):
            self._output = out[-1]
        return out

    def next_out(self) -> float:
        return self._interpolate()
