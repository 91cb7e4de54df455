# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Quality scoring for Screenscore.

Markup inspection and aggregation of metric scores into a QualityReport.
"""

from screenscore.quality.aggregate import (
    ANALYSIS_METRICS,
    DEFAULT_WEIGHTS,
    GENERAL_IMPROVEMENTS,
    IMPROVEMENT_RULES,
    ISSUE_RULES,
    ImprovementRule,
    IssueRule,
    QualityConfig,
    aggregate,
    analysis_breakdown,
    code_suggestions,
    generate_improvements,
    identify_issues,
    overall_score,
    score_confidence,
)
from screenscore.quality.structure import inspect_markup

__all__ = [
    "ANALYSIS_METRICS",
    "DEFAULT_WEIGHTS",
    "ISSUE_RULES",
    "IMPROVEMENT_RULES",
    "GENERAL_IMPROVEMENTS",
    "IssueRule",
    "ImprovementRule",
    "QualityConfig",
    "aggregate",
    "analysis_breakdown",
    "overall_score",
    "score_confidence",
    "identify_issues",
    "generate_improvements",
    "code_suggestions",
    "inspect_markup",
]
