# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""Brand consistency of generated UI source code."""

from __future__ import annotations

from screenscore.schema import BrandMatch
from screenscore.brand.registry import DEFAULT_REGISTRY, BrandRegistry

MISSING_PRIMARY_COLOR_PENALTY = 30
MISSING_FONT_PENALTY = 20
MISSING_RADIUS_PENALTY = 20


def brand_consistency(
    match: BrandMatch,
    source: str,
    registry: BrandRegistry = DEFAULT_REGISTRY,
) -> float:
    """
    Score (0-100) how well ``source`` carries the matched brand's identity.

    Starts at 100 and deducts for a missing primary color, a missing brand
    (or system) font and the absence of any border radius. Without a
    matched brand, or for a brand the registry does not know, the score
    stays at 100.
    """
    score = 100.0
    if match.brand is None or match.brand not in registry:
        return score

    profile = registry[match.brand]
    lowered = source.lower()

    if profile.primary.lower().lstrip("#") not in lowered:
        score -= MISSING_PRIMARY_COLOR_PENALTY

    if profile.font_family.lower() not in lowered and "system-ui" not in lowered:
        score -= MISSING_FONT_PENALTY

    if "border-radius" not in lowered and "borderradius" not in lowered:
        score -= MISSING_RADIUS_PENALTY

    return max(0.0, score)
