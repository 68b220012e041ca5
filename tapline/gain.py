"""Amplitude <-> dBFS conversion and gain application.

The floor is -120 dBFS: anything quieter (or non-finite) maps to the floor on
the way in and to silence on the way out.
"""

import math

DB_FLOOR = -120.0
_AMP_FLOOR = 1e-6  # 10 ** (DB_FLOOR / 20)


def to_db(sample: float) -> float:
    """Magnitude -> dBFS. Tiny or non-finite values give -120."""
    assert not sample < 0, f"to_db expects a magnitude, got {sample}"
    if sample > _AMP_FLOOR and math.isfinite(sample):
        return 20.0 * math.log10(sample)
    return DB_FLOOR


def to_sample(db_value: float) -> float:
    """dBFS -> linear amplitude. At or below -120, or non-finite, gives 0."""
    if db_value > DB_FLOOR and math.isfinite(db_value):
        return 10.0 ** (db_value / 20.0)
    return 0.0


def apply_gain(sample: float, ratio: float) -> float:
    assert math.isfinite(ratio) and ratio >= 0.0, f"invalid gain ratio {ratio}"
    return sample * ratio
