# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Pixel-level comparison of a source screenshot and a rendered reproduction.

Both images are resized to the smaller width and the smaller height so
pixel indices align 1:1. Every aligned pixel pair contributes its RGB
Euclidean distance to the total; pairs above the difference threshold
become 1×1 difference regions, up to a cap.

    similarity = 1 - total_distance / (pixel_count * 255 * √3)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from numpy.typing import NDArray

from screenscore.schema import (
    BoundingBox,
    DifferenceKind,
    DifferenceRegion,
    PixelComparison,
)
from screenscore.measure.colorspace import MAX_RGB_DISTANCE, rgb_distance
from screenscore.measure.image import RasterImage, load_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonConfig:
    """Configuration for pixel comparison."""

    # RGB distance above which a pixel pair is recorded as a difference
    threshold: float = 30.0

    # Maximum number of difference regions reported
    max_regions: int = 100

    # Similarity reported when either image cannot be read
    fallback_similarity: float = 0.5


def compare_pixels(
    original: RasterImage,
    rendered: RasterImage,
    config: ComparisonConfig | None = None,
) -> PixelComparison:
    """
    Compare two decoded images.

    Difference regions are collected in row-major scan order until the cap
    is reached, then ranked most severe first (stable, so equal severities
    keep scan order). Distance accumulation covers every pixel pair
    regardless of the cap.

    Args:
        original: Source screenshot
        rendered: Rendered reproduction
        config: Thresholds (defaults if None)

    Returns:
        PixelComparison with similarity in [0, 1]
    """
    config = config or ComparisonConfig()

    width = min(original.width, rendered.width)
    height = min(original.height, rendered.height)

    a = original.resize(width, height).rgb()
    b = rendered.resize(width, height).rgb()

    distances = rgb_distance(a, b)
    pixel_count = width * height
    total = float(distances.sum())

    similarity = 1.0 - total / (pixel_count * MAX_RGB_DISTANCE)
    similarity = min(1.0, max(0.0, similarity))

    over = distances > config.threshold
    changed = int(np.count_nonzero(over))

    return PixelComparison(
        similarity=similarity,
        differences=_collect_regions(distances, over, config.max_regions),
        width=width,
        height=height,
        changed_ratio=changed / pixel_count,
    )


def compare_images(
    original: Union[str, Path, RasterImage, NDArray[np.uint8]],
    rendered: Union[str, Path, RasterImage, NDArray[np.uint8]],
    config: ComparisonConfig | None = None,
) -> PixelComparison:
    """
    Decode and compare two images.

    Any failure to read either image yields the neutral fallback
    (similarity 0.5, no differences, ``fallback=True``) instead of raising,
    so a broken render never aborts a validation run.
    """
    config = config or ComparisonConfig()
    try:
        return compare_pixels(load_image(original), load_image(rendered), config)
    except Exception:
        logger.warning("Pixel comparison failed, using neutral similarity", exc_info=True)
        return fallback_comparison(config)


def fallback_comparison(config: ComparisonConfig | None = None) -> PixelComparison:
    """The neutral result used when a comparison cannot run."""
    config = config or ComparisonConfig()
    return PixelComparison(similarity=config.fallback_similarity, fallback=True)


def _collect_regions(
    distances: NDArray[np.float64],
    over: NDArray[np.bool_],
    max_regions: int,
) -> tuple[DifferenceRegion, ...]:
    """First ``max_regions`` pixels over threshold, ranked by severity."""
    if max_regions <= 0:
        return ()

    ys, xs = np.nonzero(over)  # row-major order
    ys, xs = ys[:max_regions], xs[:max_regions]

    regions = []
    for y, x in zip(ys.tolist(), xs.tolist()):
        diff = float(distances[y, x])
        regions.append(DifferenceRegion(
            region=BoundingBox(x=x, y=y, width=1, height=1),
            severity=min(diff / 255.0, 1.0),
            kind=DifferenceKind.COLOR,
            description=f"Color difference: {round(diff)}",
        ))

    regions.sort(key=lambda r: r.severity, reverse=True)
    return tuple(regions)
