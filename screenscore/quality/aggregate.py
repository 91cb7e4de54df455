# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Quality aggregation.

Combines the six metric scores into one weighted overall score, a
confidence derived from how much the metrics agree, and ranked issue and
improvement lists produced by fixed rule tables.

    overall    = round(Σ wᵢ·sᵢ / Σ wᵢ)
    confidence = round(max(0, 100 − stddev(s)))

Low variance across metrics signals a consistent result; high variance
signals a partial or suspect analysis. Rounding is half-up.

This module is pure computation: no I/O, no retries, no model calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from screenscore.schema import (
    NEUTRAL_SCORE,
    BrandMatch,
    IssueKind,
    Palette,
    QualityReport,
    ScoreBreakdown,
    Severity,
    ValidationIssue,
)
from screenscore.brand.registry import BrandProfile


DEFAULT_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "visualSimilarity": 0.25,
    "layoutAccuracy": 0.20,
    "colorMatching": 0.15,
    "typographyMatch": 0.15,
    "interactionElements": 0.15,
    "brandConsistency": 0.10,
})


@dataclass(frozen=True)
class IssueRule:
    """Emit an issue when ``metric`` scores below ``below``."""
    metric: str
    below: float
    kind: IssueKind
    severity: Severity
    description: str
    suggestion: str


@dataclass(frozen=True)
class ImprovementRule:
    """Emit a recommendation when ``metric`` scores below ``below``."""
    metric: str
    below: float
    text: str


# Checked in this order; the resulting issues are then ranked by severity
ISSUE_RULES: tuple[IssueRule, ...] = (
    IssueRule(
        metric="visualSimilarity",
        below=80,
        kind=IssueKind.LAYOUT,
        severity=Severity.HIGH,
        description="시각적 유사도가 낮습니다",
        suggestion="레이아웃과 색상을 원본과 더 일치하도록 조정하세요",
    ),
    IssueRule(
        metric="layoutAccuracy",
        below=70,
        kind=IssueKind.LAYOUT,
        severity=Severity.MEDIUM,
        description="레이아웃 구조가 원본과 다릅니다",
        suggestion="HTML 구조를 원본 이미지와 더 일치하도록 수정하세요",
    ),
    IssueRule(
        metric="interactionElements",
        below=80,
        kind=IssueKind.INTERACTION,
        severity=Severity.MEDIUM,
        description="인터랙션 요소가 부족합니다",
        suggestion="버튼, 링크 등의 클릭 가능한 요소를 추가하세요",
    ),
    IssueRule(
        metric="colorMatching",
        below=70,
        kind=IssueKind.COLOR,
        severity=Severity.HIGH,
        description="색상이 원본과 다릅니다",
        suggestion="브랜드 색상을 정확히 사용하세요",
    ),
    IssueRule(
        metric="typographyMatch",
        below=70,
        kind=IssueKind.TYPOGRAPHY,
        severity=Severity.MEDIUM,
        description="폰트가 원본과 다릅니다",
        suggestion="올바른 폰트 패밀리와 크기를 사용하세요",
    ),
)

IMPROVEMENT_RULES: tuple[ImprovementRule, ...] = (
    ImprovementRule("visualSimilarity", 80, "레이아웃 간격과 비율을 원본과 정확히 일치시키세요"),
    ImprovementRule("colorMatching", 80, "브랜드 가이드라인에 따른 정확한 색상 코드를 사용하세요"),
    ImprovementRule("typographyMatch", 80, "원본과 동일한 폰트 패밀리, 크기, 굵기를 적용하세요"),
    ImprovementRule("interactionElements", 80, "모든 클릭 가능한 요소에 적절한 이벤트 핸들러를 추가하세요"),
    ImprovementRule("brandConsistency", 80, "브랜드 아이덴티티를 정확히 반영하도록 디자인을 수정하세요"),
)

# Always appended after the metric-driven recommendations
GENERAL_IMPROVEMENTS: tuple[str, ...] = (
    "반응형 디자인을 추가하여 모바일 호환성을 확보하세요",
    "접근성(WCAG) 가이드라인을 준수하도록 개선하세요",
    "로딩 성능 최적화를 위해 이미지와 폰트를 최적화하세요",
)


@dataclass(frozen=True)
class QualityConfig:
    """Configuration for quality aggregation."""

    weights: Mapping[str, float] = field(default_factory=lambda: DEFAULT_WEIGHTS)
    issue_rules: tuple[IssueRule, ...] = ISSUE_RULES
    improvement_rules: tuple[ImprovementRule, ...] = IMPROVEMENT_RULES
    general_improvements: tuple[str, ...] = GENERAL_IMPROVEMENTS
    neutral_score: float = NEUTRAL_SCORE

    def restricted_to(self, metrics: Iterable[str]) -> QualityConfig:
        """Copy whose issue and improvement rules only cover ``metrics``."""
        metrics = frozenset(metrics)
        return replace(
            self,
            issue_rules=tuple(r for r in self.issue_rules if r.metric in metrics),
            improvement_rules=tuple(r for r in self.improvement_rules if r.metric in metrics),
        )


# Metrics analysis mode actually measures; the rest stay neutral
ANALYSIS_METRICS: frozenset[str] = frozenset({"colorMatching", "brandConsistency"})


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def overall_score(breakdown: ScoreBreakdown, weights: Mapping[str, float] = DEFAULT_WEIGHTS) -> int:
    """
    Weighted mean of the breakdown, rounded.

    Metrics without a weight contribute nothing.
    """
    total_score = 0.0
    total_weight = 0.0
    for metric, value in breakdown.as_dict().items():
        weight = weights.get(metric, 0.0)
        total_score += value * weight
        total_weight += weight
    if total_weight <= 0:
        raise ValueError("At least one metric must carry a positive weight")
    return min(100, max(0, round_half_up(total_score / total_weight)))


def score_confidence(breakdown: ScoreBreakdown) -> int:
    """100 minus the population standard deviation of the six scores, rounded."""
    scores = list(breakdown.as_dict().values())
    mean = sum(scores) / len(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    return min(100, round_half_up(max(0.0, 100.0 - math.sqrt(variance))))


def identify_issues(
    breakdown: ScoreBreakdown,
    rules: tuple[IssueRule, ...] = ISSUE_RULES,
) -> tuple[ValidationIssue, ...]:
    """Issues for every rule whose metric is below its threshold, most severe first."""
    scores = breakdown.as_dict()
    issues = [
        ValidationIssue(
            kind=rule.kind,
            severity=rule.severity,
            description=rule.description,
            suggestion=rule.suggestion,
        )
        for rule in rules
        if scores.get(rule.metric, NEUTRAL_SCORE) < rule.below
    ]
    issues.sort(key=lambda issue: issue.severity.rank, reverse=True)
    return tuple(issues)


def generate_improvements(
    breakdown: ScoreBreakdown,
    rules: tuple[ImprovementRule, ...] = IMPROVEMENT_RULES,
    general: tuple[str, ...] = GENERAL_IMPROVEMENTS,
) -> tuple[str, ...]:
    """Metric-driven recommendations followed by the general ones."""
    scores = breakdown.as_dict()
    lines = [rule.text for rule in rules if scores.get(rule.metric, NEUTRAL_SCORE) < rule.below]
    return tuple(lines) + tuple(general)


def aggregate(breakdown: ScoreBreakdown, config: Optional[QualityConfig] = None) -> QualityReport:
    """
    Aggregate a breakdown into a QualityReport.

    Example:
        >>> report = aggregate(ScoreBreakdown(85, 90, 85, 80, 85, 100))
        >>> report.overall_score
        87
    """
    config = config or QualityConfig()
    return QualityReport(
        overall_score=overall_score(breakdown, config.weights),
        confidence=score_confidence(breakdown),
        breakdown=breakdown,
        issues=identify_issues(breakdown, config.issue_rules),
        improvements=generate_improvements(
            breakdown, config.improvement_rules, config.general_improvements,
        ),
    )


def analysis_breakdown(
    palette: Palette,
    brand: BrandMatch,
    neutral: float = NEUTRAL_SCORE,
) -> ScoreBreakdown:
    """
    Breakdown for analysis mode, where no reproduction exists yet.

    Only the metrics the analysis can speak to move off neutral:
    colorMatching is the share of the image the palette accounts for
    (neutral for a fallback palette), brandConsistency is the brand
    confidence on a 0-100 scale. Aggregate it with
    ``config.restricted_to(ANALYSIS_METRICS)`` so the neutral placeholders
    raise no issues.
    """
    if palette.fallback:
        color = neutral
    else:
        color = min(100.0, 100.0 * sum(c.coverage for c in palette.colors))
    return ScoreBreakdown(
        visual_similarity=neutral,
        layout_accuracy=neutral,
        color_matching=color,
        typography_match=neutral,
        interaction_elements=neutral,
        brand_consistency=brand.confidence * 100.0,
    )


# =============================================================================
# Code suggestions
# =============================================================================

_DEFAULT_SUGGESTION_COLOR = "#0066FF"
_DEFAULT_SUGGESTION_FONT = "system-ui"


def code_suggestions(
    issues: tuple[ValidationIssue, ...],
    profile: Optional[BrandProfile] = None,
) -> tuple[str, ...]:
    """
    Concrete snippet per issue, using the brand's color and font if known.

    Issue kinds without a snippet (brand) are skipped.
    """
    color = profile.primary if profile else _DEFAULT_SUGGESTION_COLOR
    font = profile.font_family if profile else _DEFAULT_SUGGESTION_FONT
    if font == "system-ui":
        font_stack = "system-ui, sans-serif"
    else:
        font_stack = f"'{font}', system-ui, sans-serif"

    templates = {
        IssueKind.COLOR: f"CSS에서 색상을 다음으로 변경하세요: background-color: {color}",
        IssueKind.TYPOGRAPHY: f"폰트를 다음으로 변경하세요: font-family: {font_stack}",
        IssueKind.LAYOUT: "간격을 조정하세요: margin: 16px; padding: 12px",
        IssueKind.INTERACTION: '클릭 이벤트를 추가하세요: onclick="handleClick()"',
    }
    return tuple(templates[i.kind] for i in issues if i.kind in templates)
