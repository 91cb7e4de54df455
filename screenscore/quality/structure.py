# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Structural inspection of generated UI source code.

A lexical pass only: counts opening tags, interaction hooks and class
attributes and compares them with what the analysis expected to find.
No parsing, no rendering.
"""

from __future__ import annotations

import re

from screenscore.schema import StructureScores

# Opening (non-closing) tags
_TAG_RE = re.compile(r"<[^/][^>]*>")
_INTERACTION_RE = re.compile(r"onclick|addEventListener|onPress")
_CLASS_RE = re.compile(r'class="[^"]*"')

DEFAULT_EXPECTED_ELEMENTS = 5


def inspect_markup(
    source: str,
    expected_elements: int = DEFAULT_EXPECTED_ELEMENTS,
    expected_interactions: int = 0,
) -> StructureScores:
    """
    Layout and interaction scores of a source file.

    Args:
        source: HTML (or JSX-like) text
        expected_elements: Element count the design calls for; values
            below 1 fall back to the default
        expected_interactions: Interactive element count the design calls for

    Returns:
        StructureScores with both scores in [0, 100]. With no expected
        interactions the interaction score is 100.
    """
    if expected_elements < 1:
        expected_elements = DEFAULT_EXPECTED_ELEMENTS

    element_count = len(_TAG_RE.findall(source))
    interaction_count = len(_INTERACTION_RE.findall(source))
    class_count = len(_CLASS_RE.findall(source))

    layout_score = min(100.0, element_count / expected_elements * 100.0)
    if expected_interactions > 0:
        interaction_score = min(100.0, interaction_count / expected_interactions * 100.0)
    else:
        interaction_score = 100.0

    return StructureScores(
        layout_score=layout_score,
        interaction_score=interaction_score,
        element_count=element_count,
        interaction_count=interaction_count,
        class_count=class_count,
    )
