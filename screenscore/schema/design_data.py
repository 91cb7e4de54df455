# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Design data extracted from a source screenshot.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same image → same design data
- Serializable: JSON-ready so the validation stage can reuse an analysis

Color representation:
- hex: "#RRGGBB", uppercase
- rgb: integer channels 0-255
- hsl: hue in degrees [0, 360), saturation and lightness in [0, 1]
- coverage: fraction of sampled image area (0.0-1.0)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from screenscore.schema.validation import QualityReport


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0"


# =============================================================================
# Colors
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorSample:
    """
    A single palette entry.

    Attributes:
        hex: Hex string like "#0064FF"
        rgb: (r, g, b) integer channels
        hsl: (h, s, l) derived from rgb
        coverage: Fraction of sampled pixels that quantized to this color
    """
    hex: str
    rgb: tuple[int, int, int]
    hsl: tuple[float, float, float]
    coverage: float

    def __post_init__(self) -> None:
        """Validate channel and coverage ranges."""
        if not 0.0 <= self.coverage <= 1.0:
            raise ValueError(f"Coverage must be 0-1, got {self.coverage}")
        if any(not 0 <= c <= 255 for c in self.rgb):
            raise ValueError(f"RGB channels must be 0-255, got {self.rgb}")

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, coverage: float = 0.0) -> ColorSample:
        """Build a sample from RGB channels, deriving hex and HSL."""
        from screenscore.measure.colorspace import rgb_to_hex, rgb_to_hsl
        return cls(
            hex=rgb_to_hex(r, g, b),
            rgb=(int(r), int(g), int(b)),
            hsl=rgb_to_hsl(r, g, b),
            coverage=coverage,
        )

    @classmethod
    def from_hex(cls, hex_color: str, coverage: float = 0.0) -> ColorSample:
        """Build a sample from a hex string."""
        from screenscore.measure.colorspace import hex_to_rgb
        return cls.from_rgb(*hex_to_rgb(hex_color), coverage=coverage)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "hex": self.hex,
            "rgb": list(self.rgb),
            "hsl": list(self.hsl),
            "coverage": self.coverage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ColorSample:
        """Deserialize from dictionary."""
        return cls(
            hex=data["hex"],
            rgb=tuple(data["rgb"]),
            hsl=tuple(data["hsl"]),
            coverage=data["coverage"],
        )


@dataclass(frozen=True, slots=True)
class Palette:
    """
    Ranked colors of an image, most covered first.

    Tiers are positional: the first color is dominant, the next two are
    secondary, anything after that is an accent.

    Attributes:
        colors: Samples ordered by descending coverage
        fallback: True when extraction failed and a fixed palette was returned
    """
    colors: tuple[ColorSample, ...]
    fallback: bool = False

    def __post_init__(self) -> None:
        """Validate palette structure."""
        if not self.colors:
            raise ValueError("Palette cannot be empty")
        total = sum(c.coverage for c in self.colors)
        if total > 1.0 + 1e-9:
            raise ValueError(f"Palette coverage cannot exceed 1.0, got {total:.3f}")
        coverages = [c.coverage for c in self.colors]
        if coverages != sorted(coverages, reverse=True):
            raise ValueError("Palette colors must be ordered by descending coverage")

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self):
        return iter(self.colors)

    @property
    def dominant(self) -> ColorSample:
        return self.colors[0]

    @property
    def secondary(self) -> tuple[ColorSample, ...]:
        return self.colors[1:3]

    @property
    def accent(self) -> tuple[ColorSample, ...]:
        return self.colors[3:]

    @property
    def hexes(self) -> list[str]:
        """Hex strings in rank order (the form brand matching consumes)."""
        return [c.hex for c in self.colors]

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "colors": [c.to_dict() for c in self.colors],
            "fallback": self.fallback,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Palette:
        """Deserialize from dictionary."""
        return cls(
            colors=tuple(ColorSample.from_dict(c) for c in data["colors"]),
            fallback=data.get("fallback", False),
        )


# =============================================================================
# Accessibility
# =============================================================================


@dataclass(frozen=True, slots=True)
class ContrastRatio:
    """WCAG contrast of one palette color against the dominant background."""
    foreground: str
    background: str
    ratio: float
    passes_aa: bool

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "foreground": self.foreground,
            "background": self.background,
            "ratio": self.ratio,
            "passes_aa": self.passes_aa,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ContrastRatio:
        """Deserialize from dictionary."""
        return cls(
            foreground=data["foreground"],
            background=data["background"],
            ratio=data["ratio"],
            passes_aa=data["passes_aa"],
        )


@dataclass(frozen=True, slots=True)
class AccessibilityReport:
    """Contrast audit of a palette."""
    pairs: tuple[ContrastRatio, ...]

    @property
    def wcag_compliant(self) -> bool:
        """True when every pair meets AA (vacuously true without pairs)."""
        return all(p.passes_aa for p in self.pairs)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "pairs": [p.to_dict() for p in self.pairs],
            "wcag_compliant": self.wcag_compliant,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AccessibilityReport:
        """Deserialize from dictionary."""
        return cls(pairs=tuple(ContrastRatio.from_dict(p) for p in data.get("pairs", [])))


# =============================================================================
# Spacing
# =============================================================================


@dataclass(frozen=True, slots=True)
class SpacingSystem:
    """
    Spacing rhythm detected from color transitions.

    Attributes:
        base_unit: Greatest common divisor of the most frequent spacings
        scale: base_unit multiples 1..16
        common: The most frequent raw spacing measurements, in rank order
    """
    base_unit: int
    scale: tuple[int, ...]
    common: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.base_unit <= 0:
            raise ValueError(f"Base unit must be positive, got {self.base_unit}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "base_unit": self.base_unit,
            "scale": list(self.scale),
            "common": list(self.common),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SpacingSystem:
        """Deserialize from dictionary."""
        return cls(
            base_unit=data["base_unit"],
            scale=tuple(data["scale"]),
            common=tuple(data.get("common", ())),
        )


# =============================================================================
# Brand
# =============================================================================


@dataclass(frozen=True, slots=True)
class BrandMatch:
    """
    Result of brand identification.

    ``brand`` is only set when the confidence cleared the identification
    threshold; ``confidence`` is reported either way.

    Attributes:
        brand: Registry name of the matched brand, or None
        confidence: min(score / 100, 1)
        score: Raw accumulated score of the best candidate
    """
    brand: Optional[str]
    confidence: float
    score: int = 0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be 0-1, got {self.confidence}")

    @classmethod
    def none(cls) -> BrandMatch:
        return cls(brand=None, confidence=0.0, score=0)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"brand": self.brand, "confidence": self.confidence, "score": self.score}

    @classmethod
    def from_dict(cls, data: dict) -> BrandMatch:
        """Deserialize from dictionary."""
        return cls(
            brand=data.get("brand"),
            confidence=data.get("confidence", 0.0),
            score=data.get("score", 0),
        )


# =============================================================================
# Vision-model description
# =============================================================================


@dataclass(frozen=True, slots=True)
class DesignDescription:
    """
    What the vision model reported about a screenshot, merged over defaults.

    Every field has a deterministic default so a missing or unparseable
    response still yields a complete description.
    """
    text: str = ""
    layout: str = "flow"
    direction: str = "column"
    theme: str = "light"
    primary_font: str = "system-ui, sans-serif"
    body_size: float = 16.0
    heading_sizes: tuple[float, ...] = (32.0, 24.0, 20.0, 18.0)
    line_height: float = 1.5
    element_count: int = 0
    interactive_count: int = 0
    from_oracle: bool = False

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "text": self.text,
            "layout": self.layout,
            "direction": self.direction,
            "theme": self.theme,
            "primary_font": self.primary_font,
            "body_size": self.body_size,
            "heading_sizes": list(self.heading_sizes),
            "line_height": self.line_height,
            "element_count": self.element_count,
            "interactive_count": self.interactive_count,
            "from_oracle": self.from_oracle,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DesignDescription:
        """Deserialize from dictionary."""
        defaults = cls()
        return cls(
            text=data.get("text", defaults.text),
            layout=data.get("layout", defaults.layout),
            direction=data.get("direction", defaults.direction),
            theme=data.get("theme", defaults.theme),
            primary_font=data.get("primary_font", defaults.primary_font),
            body_size=data.get("body_size", defaults.body_size),
            heading_sizes=tuple(data.get("heading_sizes", defaults.heading_sizes)),
            line_height=data.get("line_height", defaults.line_height),
            element_count=data.get("element_count", defaults.element_count),
            interactive_count=data.get("interactive_count", defaults.interactive_count),
            from_oracle=data.get("from_oracle", defaults.from_oracle),
        )


# =============================================================================
# Top-Level Analysis Container
# =============================================================================


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """
    Complete analysis of a source screenshot.

    Produced by the analysis pipeline and persisted for the validation stage.

    Attributes:
        width: Source image width in pixels
        height: Source image height in pixels
        palette: Ranked color palette
        brand: Brand identification result
        spacing: Detected spacing system
        accessibility: Contrast audit of the palette
        description: Vision-model description (defaults when unavailable)
        quality: Analysis-mode quality report
        image_hash: Optional hash of the decoded pixels
    """
    width: int
    height: int
    palette: Palette
    brand: BrandMatch
    spacing: SpacingSystem
    accessibility: AccessibilityReport
    description: DesignDescription
    quality: QualityReport
    version: str = field(default=SCHEMA_VERSION)
    image_hash: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        result = {
            "version": self.version,
            "dimensions": {"width": self.width, "height": self.height},
            "palette": self.palette.to_dict(),
            "brand": self.brand.to_dict(),
            "spacing": self.spacing.to_dict(),
            "accessibility": self.accessibility.to_dict(),
            "description": self.description.to_dict(),
            "quality": self.quality.to_dict(),
        }
        if self.image_hash is not None:
            result["image_hash"] = self.image_hash
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> AnalysisResult:
        """Deserialize from dictionary."""
        from screenscore.schema.validation import QualityReport
        dimensions = data["dimensions"]
        return cls(
            version=data.get("version", SCHEMA_VERSION),
            width=dimensions["width"],
            height=dimensions["height"],
            palette=Palette.from_dict(data["palette"]),
            brand=BrandMatch.from_dict(data["brand"]),
            spacing=SpacingSystem.from_dict(data["spacing"]),
            accessibility=AccessibilityReport.from_dict(data.get("accessibility", {})),
            description=DesignDescription.from_dict(data.get("description", {})),
            quality=QualityReport.from_dict(data["quality"]),
            image_hash=data.get("image_hash"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> AnalysisResult:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
