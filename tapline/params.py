"""Parameter defaults and unit helpers shared by the primitives.

This is the shared contract between host code and the building blocks:
delay lines can be described by a plain dict in the format of default_params().
"""

from __future__ import annotations

import numpy as np

SR = 44100

# Capacity used when the host does not say otherwise (~93ms at 44.1kHz)
DEFAULT_MAX_DELAY = 4095

DEFAULT_DTYPE = np.float64


def default_params() -> dict:
    """A short slap-back delay with room to grow.

    delay_ms is converted at sample_rate when the line is built; a "delay" key
    (in samples) takes precedence over it.
    """
    return {
        "delay_ms": 20.0,
        "max_delay": DEFAULT_MAX_DELAY,
        "dtype": "float64",
        "sample_rate": SR,
    }


def seconds_to_samples(seconds: float, sr: int = SR) -> int:
    return int(round(seconds * sr))


def ms_to_samples(ms: float, sr: int = SR) -> int:
    return seconds_to_samples(ms / 1000.0, sr)


def delay_from_params(params: dict | None = None):
    """Build a TappedDelayLine from a (partial) params dict merged over the defaults."""
    from tapline.delay_line import TappedDelayLine

    p = default_params()
    if params:
        p.update(params)
    if "delay" in p:
        delay = int(p["delay"])
    else:
        delay = ms_to_samples(p["delay_ms"], p["sample_rate"])
    return TappedDelayLine(delay, int(p["max_delay"]), dtype=p["dtype"])
