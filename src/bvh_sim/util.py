# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric conversion.

All 2D vectors in the simulation are numpy arrays of shape (2,) and
dtype float64; these helpers keep conversions in one place.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def readonly(v: np.ndarray) -> np.ndarray:
    """Return a float64 copy of v that rejects in-place writes."""
    out = f64(v)
    out.setflags(write=False)
    return out


def is_finite(v: np.ndarray) -> bool:
    """True when every component of v is a finite number."""
    return bool(np.all(np.isfinite(v)))
