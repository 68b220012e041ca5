"""Sample type abstraction: every primitive stores its state in one float dtype.

Single and double precision are both supported. Anything numpy considers a
floating dtype is accepted (zero value, addition and ordering all behave).
"""

import numpy as np


def sample_dtype(dtype) -> np.dtype:
    """Normalize `dtype` to a numpy floating dtype, or raise TypeError."""
    dt = np.dtype(dtype)
    if not np.issubdtype(dt, np.floating):
        raise TypeError(f"Sample type must be floating point, got {dt}")
    return dt


def zeros(n: int, dtype) -> np.ndarray:
    return np.zeros(n, dtype=sample_dtype(dtype))
