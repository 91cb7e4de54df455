# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Measurement core for Screenscore.

Deterministic pixel work: decoding, palette extraction, spacing detection,
contrast audit and pixel comparison. Nothing here calls a model.
"""

from screenscore.measure.compare import ComparisonConfig, compare_images, compare_pixels
from screenscore.measure.contrast import audit_palette
from screenscore.measure.image import (
    ImageDecodeError,
    RasterImage,
    UnsupportedImageFormatError,
    load_image,
)
from screenscore.measure.palette import extract_palette
from screenscore.measure.spacing import detect_spacing

__all__ = [
    "RasterImage",
    "load_image",
    "ImageDecodeError",
    "UnsupportedImageFormatError",
    "extract_palette",
    "detect_spacing",
    "audit_palette",
    "ComparisonConfig",
    "compare_pixels",
    "compare_images",
]
