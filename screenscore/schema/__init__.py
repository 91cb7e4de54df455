# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Schema definitions for design data and validation results.

All types in this module are immutable (frozen dataclasses).
Once an analysis or validation is produced it is a fact and cannot be altered.
"""

from screenscore.schema.design_data import (
    SCHEMA_VERSION,
    AccessibilityReport,
    AnalysisResult,
    BrandMatch,
    ColorSample,
    ContrastRatio,
    DesignDescription,
    Palette,
    SpacingSystem,
)
from screenscore.schema.validation import (
    METRIC_NAMES,
    NEUTRAL_SCORE,
    BoundingBox,
    DifferenceKind,
    DifferenceRegion,
    IssueKind,
    OracleScores,
    PixelComparison,
    QualityReport,
    ScoreBreakdown,
    Severity,
    StructureScores,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Design data
    "ColorSample",
    "Palette",
    "ContrastRatio",
    "AccessibilityReport",
    "SpacingSystem",
    "BrandMatch",
    "DesignDescription",
    "AnalysisResult",
    # Validation
    "METRIC_NAMES",
    "NEUTRAL_SCORE",
    "BoundingBox",
    "DifferenceKind",
    "DifferenceRegion",
    "PixelComparison",
    "ScoreBreakdown",
    "OracleScores",
    "StructureScores",
    "IssueKind",
    "Severity",
    "ValidationIssue",
    "QualityReport",
    "ValidationResult",
]
