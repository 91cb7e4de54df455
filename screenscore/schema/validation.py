# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Validation and quality types.

These describe how faithfully a rendered reproduction matches its source
screenshot: pixel differences, the six-metric score breakdown, issues and
the aggregated quality report.

A ScoreBreakdown is never partial. Every metric is always present; metrics
whose sub-analysis was unavailable hold the neutral score.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from screenscore.schema.design_data import SCHEMA_VERSION


NEUTRAL_SCORE = 70.0

# Serialized metric names, in breakdown order
METRIC_NAMES = (
    "visualSimilarity",
    "layoutAccuracy",
    "colorMatching",
    "typographyMatch",
    "interactionElements",
    "brandConsistency",
)


# =============================================================================
# Pixel Differences
# =============================================================================


class DifferenceKind(Enum):
    """What kind of divergence a difference region represents."""
    COLOR = "color"
    STRUCTURE = "structure"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned pixel rectangle."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Box size must be non-negative, got {self.width}x{self.height}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> BoundingBox:
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"], width=data["width"], height=data["height"])


@dataclass(frozen=True, slots=True)
class DifferenceRegion:
    """
    A localized area where the reproduction diverges from the source.

    Attributes:
        region: Bounding box in the aligned (resized) coordinate space
        severity: 0.0-1.0, distance normalized by 255 and capped at 1
        kind: Divergence kind
        description: Short human-readable note
    """
    region: BoundingBox
    severity: float
    kind: DifferenceKind = DifferenceKind.COLOR
    description: str = ""

    def __post_init__(self) -> None:
        if not 0.0 <= self.severity <= 1.0:
            raise ValueError(f"Severity must be 0-1, got {self.severity}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "region": self.region.to_dict(),
            "severity": self.severity,
            "kind": self.kind.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DifferenceRegion:
        """Deserialize from dictionary."""
        return cls(
            region=BoundingBox.from_dict(data["region"]),
            severity=data["severity"],
            kind=DifferenceKind(data.get("kind", "color")),
            description=data.get("description", ""),
        )


@dataclass(frozen=True, slots=True)
class PixelComparison:
    """
    Result of comparing a source screenshot with a rendered reproduction.

    Attributes:
        similarity: 1 - total distance / max possible distance, in [0, 1]
        differences: Most severe first, at most the configured cap
        width: Width of the aligned comparison area
        height: Height of the aligned comparison area
        changed_ratio: Fraction of pixel pairs above the difference threshold
        fallback: True when either image could not be read
    """
    similarity: float
    differences: tuple[DifferenceRegion, ...] = ()
    width: int = 0
    height: int = 0
    changed_ratio: float = 0.0
    fallback: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity <= 1.0:
            raise ValueError(f"Similarity must be 0-1, got {self.similarity}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "similarity": self.similarity,
            "differences": [d.to_dict() for d in self.differences],
            "dimensions": {"width": self.width, "height": self.height},
            "changed_ratio": self.changed_ratio,
            "fallback": self.fallback,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PixelComparison:
        """Deserialize from dictionary."""
        dimensions = data.get("dimensions", {})
        return cls(
            similarity=data["similarity"],
            differences=tuple(DifferenceRegion.from_dict(d) for d in data.get("differences", [])),
            width=dimensions.get("width", 0),
            height=dimensions.get("height", 0),
            changed_ratio=data.get("changed_ratio", 0.0),
            fallback=data.get("fallback", False),
        )


# =============================================================================
# Scores
# =============================================================================


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """
    The six quality metrics, each 0-100.

    Serialized with the metric names in METRIC_NAMES.
    """
    visual_similarity: float = NEUTRAL_SCORE
    layout_accuracy: float = NEUTRAL_SCORE
    color_matching: float = NEUTRAL_SCORE
    typography_match: float = NEUTRAL_SCORE
    interaction_elements: float = NEUTRAL_SCORE
    brand_consistency: float = NEUTRAL_SCORE

    def __post_init__(self) -> None:
        for name, value in self.as_dict().items():
            if not 0.0 <= value <= 100.0:
                raise ValueError(f"{name} must be 0-100, got {value}")

    def as_dict(self) -> dict[str, float]:
        """Metric name → score, in METRIC_NAMES order."""
        return dict(zip(METRIC_NAMES, (
            self.visual_similarity,
            self.layout_accuracy,
            self.color_matching,
            self.typography_match,
            self.interaction_elements,
            self.brand_consistency,
        )))

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return self.as_dict()

    @classmethod
    def from_dict(cls, data: dict) -> ScoreBreakdown:
        """Deserialize from dictionary; absent metrics take the neutral score."""
        return cls(
            visual_similarity=data.get("visualSimilarity", NEUTRAL_SCORE),
            layout_accuracy=data.get("layoutAccuracy", NEUTRAL_SCORE),
            color_matching=data.get("colorMatching", NEUTRAL_SCORE),
            typography_match=data.get("typographyMatch", NEUTRAL_SCORE),
            interaction_elements=data.get("interactionElements", NEUTRAL_SCORE),
            brand_consistency=data.get("brandConsistency", NEUTRAL_SCORE),
        )


@dataclass(frozen=True, slots=True)
class OracleScores:
    """
    Scores the vision model gave a reproduction (0-100 each).

    Attributes:
        fallback: True when the oracle call failed and all scores are neutral
        details: Raw response text, kept for the report consumer
    """
    color: float = NEUTRAL_SCORE
    typography: float = NEUTRAL_SCORE
    layout: float = NEUTRAL_SCORE
    brand: float = NEUTRAL_SCORE
    details: str = ""
    fallback: bool = False

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "color": self.color,
            "typography": self.typography,
            "layout": self.layout,
            "brand": self.brand,
            "details": self.details,
            "fallback": self.fallback,
        }

    @classmethod
    def from_dict(cls, data: dict) -> OracleScores:
        """Deserialize from dictionary."""
        return cls(
            color=data.get("color", NEUTRAL_SCORE),
            typography=data.get("typography", NEUTRAL_SCORE),
            layout=data.get("layout", NEUTRAL_SCORE),
            brand=data.get("brand", NEUTRAL_SCORE),
            details=data.get("details", ""),
            fallback=data.get("fallback", False),
        )


@dataclass(frozen=True, slots=True)
class StructureScores:
    """Sub-scores from inspecting the reproduction's markup."""
    layout_score: float
    interaction_score: float
    element_count: int = 0
    interaction_count: int = 0
    class_count: int = 0

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "layout_score": self.layout_score,
            "interaction_score": self.interaction_score,
            "element_count": self.element_count,
            "interaction_count": self.interaction_count,
            "class_count": self.class_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StructureScores:
        """Deserialize from dictionary."""
        return cls(
            layout_score=data["layout_score"],
            interaction_score=data["interaction_score"],
            element_count=data.get("element_count", 0),
            interaction_count=data.get("interaction_count", 0),
            class_count=data.get("class_count", 0),
        )


# =============================================================================
# Issues
# =============================================================================


class IssueKind(Enum):
    LAYOUT = "layout"
    COLOR = "color"
    TYPOGRAPHY = "typography"
    INTERACTION = "interaction"
    BRAND = "brand"


class Severity(Enum):
    """Issue severity tier."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """0 for low up to 3 for critical."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single problem found by a validation run.

    Attributes:
        kind: Which aspect of the reproduction is affected
        severity: Severity tier
        description: What is wrong
        suggestion: How to fix it
        location: Optional area of the image the issue refers to
    """
    kind: IssueKind
    severity: Severity
    description: str
    suggestion: str
    location: Optional[BoundingBox] = None

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        d = {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "description": self.description,
            "suggestion": self.suggestion,
        }
        if self.location is not None:
            d["location"] = self.location.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ValidationIssue:
        """Deserialize from dictionary."""
        return cls(
            kind=IssueKind(data["kind"]),
            severity=Severity(data["severity"]),
            description=data["description"],
            suggestion=data["suggestion"],
            location=BoundingBox.from_dict(data["location"]) if data.get("location") else None,
        )


# =============================================================================
# Reports
# =============================================================================


@dataclass(frozen=True, slots=True)
class QualityReport:
    """
    Aggregated quality of an analysis or a reproduction.

    Attributes:
        overall_score: Weighted mean of the breakdown, rounded, 0-100
        confidence: 100 minus the breakdown's standard deviation, rounded, 0-100
        breakdown: All six metric scores
        issues: Ranked issues, most severe first
        improvements: Ranked recommendation lines
    """
    overall_score: int
    confidence: int
    breakdown: ScoreBreakdown
    issues: tuple[ValidationIssue, ...] = ()
    improvements: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.overall_score <= 100:
            raise ValueError(f"Overall score must be 0-100, got {self.overall_score}")
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"Confidence must be 0-100, got {self.confidence}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "overall_score": self.overall_score,
            "confidence": self.confidence,
            "breakdown": self.breakdown.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "improvements": list(self.improvements),
        }

    @classmethod
    def from_dict(cls, data: dict) -> QualityReport:
        """Deserialize from dictionary."""
        return cls(
            overall_score=data["overall_score"],
            confidence=data["confidence"],
            breakdown=ScoreBreakdown.from_dict(data["breakdown"]),
            issues=tuple(ValidationIssue.from_dict(i) for i in data.get("issues", [])),
            improvements=tuple(data.get("improvements", [])),
        )


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Complete result of validating a reproduction against its source.

    Attributes:
        report: Aggregated quality report
        comparison: Pixel comparison (fallback values when rendering failed)
        oracle: Vision-model scores (neutral when unavailable)
        structure: Markup inspection sub-scores
        brand_consistency: Brand consistency score of the source code
        code_suggestions: Concrete code snippets addressing the issues
    """
    report: QualityReport
    comparison: PixelComparison
    oracle: OracleScores
    structure: StructureScores
    brand_consistency: float
    code_suggestions: tuple[str, ...] = ()
    version: str = field(default=SCHEMA_VERSION)

    @property
    def overall_score(self) -> int:
        return self.report.overall_score

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "version": self.version,
            "report": self.report.to_dict(),
            "comparison": self.comparison.to_dict(),
            "oracle": self.oracle.to_dict(),
            "structure": self.structure.to_dict(),
            "brand_consistency": self.brand_consistency,
            "code_suggestions": list(self.code_suggestions),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> ValidationResult:
        """Deserialize from dictionary."""
        return cls(
            version=data.get("version", SCHEMA_VERSION),
            report=QualityReport.from_dict(data["report"]),
            comparison=PixelComparison.from_dict(data["comparison"]),
            oracle=OracleScores.from_dict(data.get("oracle", {})),
            structure=StructureScores.from_dict(data["structure"]),
            brand_consistency=data["brand_consistency"],
            code_suggestions=tuple(data.get("code_suggestions", [])),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ValidationResult:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
