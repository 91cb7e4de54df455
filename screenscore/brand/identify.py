# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Brand identification by keyword, pattern and color evidence.

For every profile in the registry:

    score = 10 × keyword occurrences
          + 15 × pattern occurrences
          + 25 × candidate colors equal to a primary/secondary/accent color

The highest score wins; on a tie the profile registered first wins.
Confidence is min(score / 100, 1), and a brand is only reported when the
confidence exceeds the threshold.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from screenscore.schema import BrandMatch
from screenscore.brand.registry import DEFAULT_REGISTRY, BrandProfile, BrandRegistry

KEYWORD_WEIGHT = 10
PATTERN_WEIGHT = 15
COLOR_WEIGHT = 25

# Score at which confidence saturates at 1.0
MAX_EXPECTED_SCORE = 100

DEFAULT_THRESHOLD = 0.3


def identify_brand(
    text: str,
    colors: Optional[Iterable[str]] = None,
    *,
    registry: BrandRegistry = DEFAULT_REGISTRY,
    threshold: float = DEFAULT_THRESHOLD,
) -> BrandMatch:
    """
    Pick the best-matching brand for a description and a palette.

    Args:
        text: Free text, e.g. a vision-model description or OCR output
        colors: Candidate hex colors (compared case-insensitively)
        registry: Profiles to score, in tie-break order
        threshold: Confidence a match must exceed to be reported

    Returns:
        BrandMatch. ``brand`` is None when nothing scored or the best
        confidence is not above ``threshold``; ``confidence`` and ``score``
        describe the best candidate either way.

    Example:
        >>> identify_brand("toss payment app", ["#0064FF", "#F5F7FA"])
        BrandMatch(brand='toss', confidence=0.85, score=85)
    """
    text = text or ""
    candidates = [c.lower() for c in (colors or ())]

    best_name: Optional[str] = None
    best_score = 0
    for name, profile in registry.items():
        score = score_profile(profile, text, candidates)
        # Strictly greater: earlier profiles win ties
        if score > best_score:
            best_name, best_score = name, score

    if best_name is None:
        return BrandMatch.none()

    confidence = min(best_score / MAX_EXPECTED_SCORE, 1.0)
    return BrandMatch(
        brand=best_name if confidence > threshold else None,
        confidence=confidence,
        score=best_score,
    )


def score_profile(profile: BrandProfile, text: str, colors: Iterable[str] = ()) -> int:
    """
    Raw evidence score of one profile.

    Args:
        profile: Brand to score
        text: Free text to search
        colors: Candidate hex colors, already lowercased or not
    """
    score = 0

    for keyword in profile.keywords:
        score += KEYWORD_WEIGHT * count_occurrences(re.escape(keyword), text)

    for pattern in profile.compiled_patterns:
        score += PATTERN_WEIGHT * len(pattern.findall(text))

    brand_colors = {c.lower() for c in profile.colors}
    for color in colors:
        if color.lower() in brand_colors:
            score += COLOR_WEIGHT

    return score


def count_occurrences(pattern: str, text: str) -> int:
    """Non-overlapping, case-insensitive match count."""
    if not text:
        return 0
    return sum(1 for _ in re.finditer(pattern, text, re.IGNORECASE))
