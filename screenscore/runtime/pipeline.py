# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Analysis and validation pipelines.

Two entry points:

    analyze(image)                              -> AnalysisResult
    validate(image, source, analysis, renderer) -> ValidationResult

Input errors (missing files, unsupported formats, undecodable images,
unsupported source types) raise. Collaborator failures (vision oracle,
renderer, comparison) are logged and replaced by neutral values, so both
pipelines always return a complete result.
"""

from __future__ import annotations

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from screenscore.schema import AnalysisResult, OracleScores, ScoreBreakdown, ValidationResult
from screenscore.measure import (
    ComparisonConfig,
    RasterImage,
    audit_palette,
    compare_pixels,
    detect_spacing,
    extract_palette,
    load_image,
)
from screenscore.measure.compare import fallback_comparison
from screenscore.brand import DEFAULT_REGISTRY, BrandRegistry, brand_consistency, identify_brand
from screenscore.quality import (
    ANALYSIS_METRICS,
    QualityConfig,
    aggregate,
    analysis_breakdown,
    code_suggestions,
    inspect_markup,
)
from screenscore.runtime.oracle import VisionOracle, describe_design, rate_reproduction
from screenscore.runtime.renderer import Renderer, UnsupportedSourceError

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, RasterImage, NDArray[np.uint8]]


def analyze(
    image: ImageInput,
    *,
    oracle: Optional[VisionOracle] = None,
    registry: BrandRegistry = DEFAULT_REGISTRY,
    n_colors: int = 5,
    quality_config: Optional[QualityConfig] = None,
) -> AnalysisResult:
    """
    Analyze a UI screenshot.

    Palette extraction and the oracle description run concurrently; brand
    identification then scores the description text together with the
    palette colors.

    Args:
        image: Path to a .png/.jpg/.jpeg/.bmp file, a decoded RasterImage,
            or an (H, W, 3|4) uint8 array
        oracle: Vision model; analysis is deterministic without one
        registry: Brand profiles to identify against
        n_colors: Palette size
        quality_config: Aggregation weights and rule tables

    Returns:
        AnalysisResult with an analysis-mode QualityReport

    Raises:
        FileNotFoundError, UnsupportedImageFormatError, ImageDecodeError:
            The image cannot be read
    """
    quality_config = quality_config or QualityConfig()
    raster = load_image(image)
    logger.debug("Analyzing %dx%d image", raster.width, raster.height)

    with ThreadPoolExecutor(max_workers=2) as pool:
        palette_future = pool.submit(extract_palette, raster, n_colors=n_colors)
        description_future = pool.submit(describe_design, oracle, raster)
        palette = palette_future.result()
        description = description_future.result()

    brand = identify_brand(description.text, palette.hexes, registry=registry)
    if brand.brand is not None:
        logger.debug("Identified brand %s (confidence %.2f)", brand.brand, brand.confidence)

    breakdown = analysis_breakdown(palette, brand, quality_config.neutral_score)

    return AnalysisResult(
        width=raster.width,
        height=raster.height,
        palette=palette,
        brand=brand,
        spacing=detect_spacing(raster),
        accessibility=audit_palette(palette),
        description=description,
        quality=aggregate(breakdown, quality_config.restricted_to(ANALYSIS_METRICS)),
        image_hash=image_hash(raster),
    )


def validate(
    original: ImageInput,
    source_path: Union[str, Path],
    analysis: AnalysisResult,
    *,
    renderer: Renderer,
    oracle: Optional[VisionOracle] = None,
    registry: BrandRegistry = DEFAULT_REGISTRY,
    comparison_config: Optional[ComparisonConfig] = None,
    quality_config: Optional[QualityConfig] = None,
) -> ValidationResult:
    """
    Validate a generated UI against the screenshot it reproduces.

    Args:
        original: The source screenshot
        source_path: Generated UI source file
        analysis: Result of ``analyze`` on the same screenshot
        renderer: Turns ``source_path`` into a screenshot
        oracle: Vision model used to rate color and typography
        registry: Brand profiles, for brand consistency and code suggestions
        comparison_config: Pixel comparison thresholds
        quality_config: Aggregation weights and rule tables

    Returns:
        ValidationResult. A failed render yields the fallback comparison
        and neutral oracle scores rather than an error.

    Raises:
        FileNotFoundError: ``source_path`` or the screenshot does not exist
        UnsupportedSourceError: The renderer cannot render ``source_path``
        UnsupportedImageFormatError, ImageDecodeError: The screenshot
            cannot be read
    """
    comparison_config = comparison_config or ComparisonConfig()
    quality_config = quality_config or QualityConfig()

    raster = load_image(original)
    source = Path(source_path).read_text(encoding="utf-8")

    try:
        rendered: Optional[RasterImage] = renderer.render(source_path)
    except UnsupportedSourceError:
        raise
    except Exception:
        logger.warning("Rendering %s failed, using fallback comparison", source_path, exc_info=True)
        rendered = None

    if rendered is None:
        comparison = fallback_comparison(comparison_config)
        oracle_scores = OracleScores(fallback=True)
    else:
        try:
            comparison = compare_pixels(raster, rendered, comparison_config)
        except Exception:
            logger.warning("Pixel comparison failed, using neutral similarity", exc_info=True)
            comparison = fallback_comparison(comparison_config)
        oracle_scores = rate_reproduction(oracle, raster, rendered)

    structure = inspect_markup(
        source,
        expected_elements=analysis.description.element_count,
        expected_interactions=analysis.description.interactive_count,
    )
    consistency = brand_consistency(analysis.brand, source, registry)

    breakdown = ScoreBreakdown(
        visual_similarity=comparison.similarity * 100.0,
        layout_accuracy=structure.layout_score,
        color_matching=oracle_scores.color,
        typography_match=oracle_scores.typography,
        interaction_elements=structure.interaction_score,
        brand_consistency=consistency,
    )
    report = aggregate(breakdown, quality_config)

    profile = registry.get(analysis.brand.brand) if analysis.brand.brand else None
    logger.debug("Validation score %d (confidence %d)", report.overall_score, report.confidence)

    return ValidationResult(
        report=report,
        comparison=comparison,
        oracle=oracle_scores,
        structure=structure,
        brand_consistency=consistency,
        code_suggestions=code_suggestions(report.issues, profile),
    )


def image_hash(raster: RasterImage) -> str:
    """SHA-256 of the decoded pixels and their shape."""
    digest = hashlib.sha256()
    digest.update(repr(raster.pixels.shape).encode("ascii"))
    digest.update(raster.pixels.tobytes())
    return "sha256:" + digest.hexdigest()
