# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Brand identification for Screenscore.

Scores free text and candidate colors against a static registry of brand
profiles, and checks generated code for the matched brand's identity.
"""

from screenscore.brand.consistency import brand_consistency
from screenscore.brand.identify import identify_brand, score_profile
from screenscore.brand.registry import (
    DEFAULT_REGISTRY,
    BrandProfile,
    BrandRegistry,
    load_registry,
)

__all__ = [
    "BrandProfile",
    "BrandRegistry",
    "DEFAULT_REGISTRY",
    "load_registry",
    "identify_brand",
    "score_profile",
    "brand_consistency",
]
