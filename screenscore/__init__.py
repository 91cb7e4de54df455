# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Screenscore -- UI screenshot analysis and reproduction validation.

Measures a UI screenshot (palette, spacing, contrast, brand) and scores how
faithfully generated UI code reproduces it.

Quick start::

    from screenscore import analyze, validate
    from screenscore.runtime import PlaywrightRenderer

    analysis = analyze("screen.png")
    analysis.palette.hexes      # ['#F0F0F0', '#0060FF', ...]
    analysis.brand.brand        # 'toss' or None

    result = validate("screen.png", "generated.html", analysis,
                      renderer=PlaywrightRenderer())
    result.report.overall_score
    result.to_json()
"""

from __future__ import annotations

__version__ = "1.0.0"

from screenscore.runtime import analyze, validate
from screenscore.schema import (
    AnalysisResult,
    BrandMatch,
    Palette,
    PixelComparison,
    QualityReport,
    ScoreBreakdown,
    ValidationResult,
)

__all__ = [
    # Core API
    "analyze",
    "validate",
    "AnalysisResult",
    "ValidationResult",
    # Types (commonly needed)
    "Palette",
    "BrandMatch",
    "PixelComparison",
    "ScoreBreakdown",
    "QualityReport",
    # Version
    "__version__",
]
