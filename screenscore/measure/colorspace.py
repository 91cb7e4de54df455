# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Color space conversions and color math.

- Hex ↔ RGB parsing and formatting
- RGB → HSL (hue in degrees, saturation/lightness in [0, 1])
- sRGB → linear RGB and WCAG relative luminance / contrast
- Euclidean RGB distance (the pixel comparison metric)

All conversions are pure NumPy or plain arithmetic for determinism.
"""

from __future__ import annotations

import math
import re

import numpy as np
from numpy.typing import NDArray


# Largest possible Euclidean distance between two RGB colors
MAX_RGB_DISTANCE = 255.0 * math.sqrt(3.0)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


# =============================================================================
# Hex ↔ RGB
# =============================================================================


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format RGB channels as "#RRGGBB"."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Parse "#RRGGBB", "RRGGBB" or the short "#RGB" form.

    Raises:
        ValueError: If the string is not a hex color
    """
    m = _HEX_RE.match(hex_color.strip())
    if not m:
        raise ValueError(f"Not a hex color: {hex_color!r}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def normalize_hex(hex_color: str) -> str:
    """Canonical uppercase "#RRGGBB" form of a hex color."""
    return rgb_to_hex(*hex_to_rgb(hex_color))


# =============================================================================
# RGB → HSL
# =============================================================================


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """
    Convert RGB [0, 255] to HSL.

    Returns:
        (h, s, l) with h in degrees [0, 360) and s, l in [0, 1].
        Achromatic colors have h = 0 and s = 0.
    """
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    hi = max(rf, gf, bf)
    lo = min(rf, gf, bf)
    lightness = (hi + lo) / 2.0

    if hi == lo:
        return 0.0, 0.0, lightness

    delta = hi - lo
    saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))

    if hi == rf:
        hue = ((gf - bf) / delta) % 6.0
    elif hi == gf:
        hue = (bf - rf) / delta + 2.0
    else:
        hue = (rf - gf) / delta + 4.0

    return (hue * 60.0) % 360.0, min(saturation, 1.0), lightness


# =============================================================================
# sRGB ↔ Linear RGB, luminance, contrast
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4)
    )


# Rec. 709 luminance coefficients used by WCAG
_LUMINANCE = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """WCAG relative luminance of an RGB [0, 255] color, in [0, 1]."""
    linear = srgb_to_linear(np.asarray(rgb, dtype=np.float64) / 255.0)
    return float(linear @ _LUMINANCE)


def contrast_ratio(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int]) -> float:
    """
    WCAG contrast ratio between two colors.

    Returns:
        Ratio in [1, 21]; order of arguments does not matter.
    """
    l1 = relative_luminance(rgb1)
    l2 = relative_luminance(rgb2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


# =============================================================================
# Distance
# =============================================================================


def rgb_distance(
    pixels1: NDArray[np.uint8],
    pixels2: NDArray[np.uint8],
) -> NDArray[np.float64]:
    """
    Per-pixel Euclidean distance in RGB space.

    Args:
        pixels1: Array of shape (..., 3)
        pixels2: Array of the same shape

    Returns:
        Array of shape (...) with distances in [0, MAX_RGB_DISTANCE]
    """
    delta = pixels1.astype(np.float64) - pixels2.astype(np.float64)
    return np.sqrt(np.sum(delta ** 2, axis=-1))
