# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Spacing system detection.

Spacing is measured as the horizontal distance from a sample point to the
next clear color transition. The most frequent distances are reduced to a
common base unit (their greatest common divisor) and expanded into a scale.
"""

from __future__ import annotations

import math
from collections import Counter
from functools import reduce

import numpy as np

from screenscore.schema import SpacingSystem
from screenscore.measure.colorspace import rgb_distance
from screenscore.measure.image import RasterImage

DEFAULT_BASE_UNIT = 8


def detect_spacing(
    image: RasterImage,
    *,
    step: int = 10,
    max_reach: int = 50,
    threshold: float = 30.0,
    top_k: int = 10,
    scale_steps: int = 16,
) -> SpacingSystem:
    """
    Detect the spacing rhythm of a screenshot.

    Args:
        image: Decoded image
        step: Lattice spacing of sample points, in pixels
        max_reach: How far right of a sample point to look for a transition
        threshold: RGB distance that counts as a transition
        top_k: How many of the most frequent spacings feed the base unit
        scale_steps: Number of multiples in the generated scale

    Returns:
        SpacingSystem; base unit 8 when no transition was found
    """
    measurements = measure_spacings(image, step=step, max_reach=max_reach, threshold=threshold)
    common = tuple(value for value, _ in Counter(measurements).most_common(top_k))
    base_unit = reduce(math.gcd, common) if common else DEFAULT_BASE_UNIT
    return SpacingSystem(
        base_unit=base_unit,
        scale=tuple(base_unit * k for k in range(1, scale_steps + 1)),
        common=common,
    )


def measure_spacings(
    image: RasterImage,
    *,
    step: int = 10,
    max_reach: int = 50,
    threshold: float = 30.0,
) -> list[int]:
    """
    Distances to the first transition right of each lattice point.

    Points with no transition within reach contribute nothing. The result
    is in row-major lattice order.
    """
    rgb = image.rgb()
    height, width = rgb.shape[:2]
    spacings: list[int] = []

    for y in range(0, height, step):
        row = rgb[y]
        for x in range(0, width, step):
            end = min(x + max_reach, width)
            if end <= x + 1:
                continue
            ahead = row[x + 1:end]
            distances = rgb_distance(ahead, row[x][np.newaxis, :])
            hits = np.flatnonzero(distances > threshold)
            if hits.size:
                spacings.append(int(hits[0]) + 1)

    return spacings
