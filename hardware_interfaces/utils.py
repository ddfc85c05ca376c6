"""Small numeric helpers for adapters."""

from __future__ import annotations

import random


def map_range(x: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """
    Map x from [in_min, in_max] onto [out_min, out_max].

    x is clamped to the input range first. A degenerate input range maps
    everything to out_min.
    """
    if x > in_max:
        x = in_max
    if x < in_min:
        x = in_min
    if in_max == in_min:
        return out_min
    return (x - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def random_int_inclusive(low: int, high: int) -> int:
    return random.randint(low, high)
