# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
WCAG contrast audit of an extracted palette.

The dominant color is treated as the background; every other palette
color is checked against it as a potential foreground.
"""

from __future__ import annotations

from screenscore.schema import AccessibilityReport, ContrastRatio, Palette
from screenscore.measure.colorspace import contrast_ratio

# WCAG 2.x AA minimum for normal-size text
AA_NORMAL_TEXT = 4.5


def audit_palette(palette: Palette, min_ratio: float = AA_NORMAL_TEXT) -> AccessibilityReport:
    """
    Compute contrast ratios of palette colors against the dominant color.

    A fallback palette carries no measured colors and yields an empty audit.
    """
    if palette.fallback:
        return AccessibilityReport(pairs=())

    background = palette.dominant
    pairs = []
    for sample in palette.colors[1:]:
        ratio = contrast_ratio(sample.rgb, background.rgb)
        pairs.append(ContrastRatio(
            foreground=sample.hex,
            background=background.hex,
            ratio=ratio,
            passes_aa=ratio >= min_ratio,
        ))
    return AccessibilityReport(pairs=tuple(pairs))
