"""
Colour dissimilarity helpers used by the region growing engine.
"""

import math
from typing import Sequence


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance between two 3-channel colour samples.

    Parameters:
    ----------
    a, b : sequence of 3 numbers
        Colour samples (lists, tuples or numpy arrays). Values are promoted
        to float before subtracting, so uint8 inputs do not wrap.

    Returns:
    -------
    float
        sqrt((a0 - b0)^2 + (a1 - b1)^2 + (a2 - b2)^2)
    """
    d0 = float(a[0]) - float(b[0])
    d1 = float(a[1]) - float(b[1])
    d2 = float(a[2]) - float(b[2])
    return math.sqrt(d0 * d0 + d1 * d1 + d2 * d2)


def color_summary(pixel: Sequence[float]) -> float:
    """Per-channel mean of a sample, collapsed to a single scalar."""
    return (float(pixel[0]) + float(pixel[1]) + float(pixel[2])) / 3.0


def color_norm(pixel: Sequence[float]) -> float:
    """Euclidean norm of a sample (distance to black)."""
    return color_distance(pixel, (0, 0, 0))
