"""Common contracts shared by the delay lines and filters.

A Processor consumes one input sample and produces one output sample, keeps
its last output around for inspection, and can forget all of its state.
Anything implementing it can be dropped into a processing chain.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Processor(ABC):
    """Per-sample processor with a block convenience wrapper."""

    dtype: np.dtype

    @abstractmethod
    def process(self, sample: float) -> float:
        """Process one sample and return the output sample."""
        ...

    @abstractmethod
    def last_out(self) -> float:
        """Most recently produced output sample."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Reset all internal memory to zero."""
        ...

    def process_block(self, samples) -> np.ndarray:
        """Process a buffer sample by sample. Subclasses override with a JIT loop."""
        x = np.asarray(samples)
        out = np.empty(len(x), dtype=self.dtype)
        for i in range(len(x)):
            out[i] = self.process(x[i])
        return out


class TappableDelayLine(ABC):
    """Random access into delay-line history, relative to the write position.

    Offset 0 is the most recently written sample, offset 1 the one before, etc.
    """

    @abstractmethod
    def tap_out(self, tap_delay: int) -> float:
        ...

    @abstractmethod
    def tap_in(self, value: float, tap_delay: int) -> None:
        ...

    @abstractmethod
    def add_to(self, value: float, tap_delay: int) -> float:
        ...


class Chain(Processor):
    """Processors run in series: each stage's output feeds the next."""

    def __init__(self, *stages: Processor):
        if not stages:
            raise ValueError("Chain needs at least one stage")
        self.stages = list(stages)
        self.dtype = stages[-1].dtype

    def process(self, sample: float) -> float:
        for stage in self.stages:
            sample = stage.process(sample)
        return sample

    def process_block(self, samples) -> np.ndarray:
        for stage in self.stages:
            samples = stage.process_block(samples)
        return samples

    def last_out(self) -> float:
        return self.stages[-1].last_out()

    def clear(self):
        for stage in self.stages:
            stage.clear()
