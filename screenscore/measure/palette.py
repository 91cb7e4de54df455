# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Palette extraction by downsampling and channel quantization.

The image is resized to a small fixed grid, every channel is rounded to
the nearest multiple of a bucket size so near-duplicate colors merge, and
the quantized colors are ranked by how many grid cells they cover.

This is a deliberately lossy approximation, not a clustering algorithm:
two visually distinct colors that fall into the same bucket are reported
as one, and a gradient is reported as its most populated bands.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from screenscore.schema import ColorSample, Palette
from screenscore.measure.image import RasterImage, load_image

logger = logging.getLogger(__name__)


FALLBACK_COLORS = ("#FFFFFF", "#000000", "#F0F0F0", "#333333", "#007BFF")


def extract_palette(
    image: Union[str, Path, RasterImage, NDArray[np.uint8]],
    *,
    n_colors: int = 5,
    sample_size: int = 50,
    bucket_size: int = 16,
) -> Palette:
    """
    Extract a ranked palette of at most ``n_colors`` colors.

    Never raises for unreadable images: if decoding or sampling fails the
    fixed fallback palette is returned (marked ``fallback=True``) so that
    extraction never blocks the rest of an analysis.

    Args:
        image: Path, RasterImage or (H, W, 3|4) uint8 array
        n_colors: Maximum number of colors to return
        sample_size: Side of the square grid the image is resized to
        bucket_size: Channel quantization step

    Returns:
        Palette ordered by descending coverage, coverage = count / samples.
        Ties keep the order in which the colors were first seen (row-major).

    Example:
        >>> palette = extract_palette("screenshot.png")
        >>> palette.dominant.hex
        '#F0F0F0'
    """
    if n_colors < 1:
        raise ValueError(f"n_colors must be at least 1, got {n_colors}")

    try:
        raster = load_image(image)
        samples = _sample_grid(raster, sample_size)
        quantized = quantize(samples, bucket_size)
    except Exception:
        logger.warning("Color extraction failed, using fallback palette", exc_info=True)
        return fallback_palette(n_colors)

    counter = Counter(map(tuple, quantized.tolist()))
    total = len(quantized)

    colors = tuple(
        ColorSample.from_rgb(r, g, b, coverage=count / total)
        for (r, g, b), count in counter.most_common(n_colors)
    )
    return Palette(colors=colors)


def fallback_palette(n_colors: int = 5) -> Palette:
    """The fixed palette used when extraction fails."""
    return Palette(
        colors=tuple(ColorSample.from_hex(h) for h in FALLBACK_COLORS[:max(1, n_colors)]),
        fallback=True,
    )


def quantize(pixels: NDArray[np.uint8], bucket_size: int = 16) -> NDArray[np.int64]:
    """
    Round every channel to the nearest multiple of ``bucket_size``.

    Halves round up (8 → 16 for a bucket of 16) and results are clamped
    to 255, so 255 stays 255 instead of becoming 256.

    Args:
        pixels: Array of shape (N, 3)

    Returns:
        int64 array of shape (N, 3)
    """
    if bucket_size < 1:
        raise ValueError(f"bucket_size must be positive, got {bucket_size}")
    scaled = np.floor(pixels.astype(np.float64) / bucket_size + 0.5) * bucket_size
    return np.minimum(scaled, 255).astype(np.int64)


def _sample_grid(raster: RasterImage, sample_size: int) -> NDArray[np.uint8]:
    """Resize to a sample_size × sample_size grid and flatten to (N, 3)."""
    grid = raster.resize(sample_size, sample_size, Image.Resampling.LANCZOS)
    return grid.rgb().reshape(-1, 3)
