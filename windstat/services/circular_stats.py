"""Arithmetic and angular averaging primitives."""
from typing import Sequence
import numpy as np


def linear_mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean of a non-empty sequence.

    Raises:
        ValueError: if values is empty
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise ValueError("linear_mean requires at least one value")
    return float(arr.mean())


def circular_mean(angles_deg: Sequence[float]) -> float:
    """
    Vector mean of angles in degrees, normalized to [0, 360).

    Each angle is treated as a unit vector; the mean direction is the angle of
    the summed vector. Averaging 350 and 10 gives 0, not 180.

    Raises:
        ValueError: if angles_deg is empty
    """
    radians = np.radians(np.asarray(angles_deg, dtype=np.float64))
    if radians.size == 0:
        raise ValueError("circular_mean requires at least one angle")
    mean = np.degrees(np.arctan2(np.sin(radians).sum(), np.cos(radians).sum()))
    return normalize_angle(float(mean))


def normalize_angle(angle_deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = angle_deg % 360.0
    # -1e-15 % 360 rounds to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped
