"""tapline: real-time audio DSP building blocks."""

from .delay_line import TappedDelayLine, LinearDelay
from .filters import (
    Biquad, OnePole, OneZero, TwoPole, TwoZero,
    Lowpass, Highpass, BandPass, BandStop,
)
from .leaky_integrator import LeakyIntegrator
from .windows import BartlettIter, HannIter, HammingIter, BlackmanIter, window
from .gain import to_db, to_sample, apply_gain
from .params import SR, default_params, delay_from_params, ms_to_samples, seconds_to_samples
from .processor import Chain, Processor, TappableDelayLine

__all__ = [
    "TappedDelayLine", "LinearDelay",
    "Biquad", "OnePole", "OneZero", "TwoPole", "TwoZero",
    "Lowpass", "Highpass", "BandPass", "BandStop",
    "LeakyIntegrator",
    "BartlettIter", "HannIter", "HammingIter", "BlackmanIter", "window",
    "to_db", "to_sample", "apply_gain",
    "SR", "default_params", "delay_from_params", "ms_to_samples", "seconds_to_samples",
    "Chain", "Processor", "TappableDelayLine",
]
