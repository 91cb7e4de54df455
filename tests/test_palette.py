# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""Tests for palette extraction, contrast audit and spacing detection."""

import numpy as np
import pytest

from screenscore.measure import RasterImage, audit_palette, detect_spacing, extract_palette
from screenscore.measure.palette import FALLBACK_COLORS, fallback_palette, quantize
from screenscore.measure.spacing import DEFAULT_BASE_UNIT, measure_spacings
from screenscore.schema import ColorSample, Palette


def _solid_image(r, g, b, height=100, width=100):
    """Create a solid-color image."""
    return np.full((height, width, 3), [r, g, b], dtype=np.uint8)


def _two_tone_image(rgb1, rgb2, height=100, width=200):
    """Create an image that is half one color, half another."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :width // 2] = rgb1
    img[:, width // 2:] = rgb2
    return img


def _stripes(period, height=30, width=100):
    """Vertical black/white stripes, each ``period`` pixels wide."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    for x in range(width):
        if (x // period) % 2:
            img[:, x] = 255
    return img


class TestQuantize:

    def test_rounds_to_nearest_bucket(self):
        px = np.array([[7, 8, 24]], dtype=np.uint8)
        assert quantize(px).tolist() == [[0, 16, 32]]

    def test_clamps_to_255(self):
        px = np.array([[255, 250, 247]], dtype=np.uint8)
        assert quantize(px).tolist() == [[255, 255, 240]]

    def test_exact_multiples_unchanged(self):
        px = np.array([[0, 96, 240]], dtype=np.uint8)
        assert quantize(px).tolist() == [[0, 96, 240]]

    def test_bad_bucket(self):
        with pytest.raises(ValueError):
            quantize(np.zeros((1, 3), dtype=np.uint8), bucket_size=0)


class TestExtractPalette:

    def test_solid_white(self):
        palette = extract_palette(_solid_image(255, 255, 255))
        assert not palette.fallback
        assert palette.hexes == ["#FFFFFF"]
        assert palette.dominant.coverage == pytest.approx(1.0)

    def test_two_tone_top_colors(self):
        palette = extract_palette(_two_tone_image([255, 0, 0], [0, 0, 255]))
        assert set(palette.hexes[:2]) == {"#FF0000", "#0000FF"}
        assert palette.colors[0].coverage > 0.4

    def test_color_sample_detail(self):
        palette = extract_palette(_solid_image(0, 96, 240))
        sample = palette.dominant
        assert sample.hex == "#0060F0"
        assert sample.rgb == (0, 96, 240)
        assert 200 < sample.hsl[0] < 230

    def test_caps_color_count(self):
        rng = np.random.default_rng(0)
        pixels = rng.integers(0, 256, size=(60, 60, 3), dtype=np.uint8)
        palette = extract_palette(pixels, n_colors=5)
        assert len(palette) == 5

    def test_ranked_by_coverage(self):
        rng = np.random.default_rng(1)
        pixels = rng.integers(0, 256, size=(60, 60, 3), dtype=np.uint8)
        palette = extract_palette(pixels)
        coverages = [c.coverage for c in palette]
        assert coverages == sorted(coverages, reverse=True)
        assert sum(coverages) <= 1.0

    def test_ties_keep_first_seen_order(self):
        # Already 50x50, so the sampling grid is the image itself
        img = np.zeros((50, 50, 3), dtype=np.uint8)
        img[:25] = [0, 0, 255]
        img[25:] = [255, 0, 0]
        palette = extract_palette(img)
        assert palette.hexes == ["#0000FF", "#FF0000"]
        assert palette.colors[0].coverage == pytest.approx(0.5)

    def test_tiers(self):
        img = np.zeros((50, 50, 3), dtype=np.uint8)
        for i, value in enumerate((0, 48, 96, 144, 192)):
            img[i * 10:(i + 1) * 10] = value
        palette = extract_palette(img)
        assert len(palette.secondary) == 2
        assert len(palette.accent) == 2

    def test_unreadable_input_falls_back(self, tmp_path):
        palette = extract_palette(tmp_path / "missing.png")
        assert palette.fallback
        assert palette.hexes == list(FALLBACK_COLORS)
        assert all(c.coverage == 0.0 for c in palette)

    def test_fallback_logs_warning(self, tmp_path, caplog):
        with caplog.at_level("WARNING", logger="screenscore.measure.palette"):
            extract_palette(tmp_path / "missing.png")
        assert "fallback palette" in caplog.text

    def test_fallback_respects_count(self):
        assert fallback_palette(3).hexes == ["#FFFFFF", "#000000", "#F0F0F0"]

    def test_invalid_count(self):
        with pytest.raises(ValueError):
            extract_palette(_solid_image(0, 0, 0), n_colors=0)

    def test_accepts_raster(self):
        palette = extract_palette(RasterImage(_solid_image(0, 0, 0)))
        assert palette.hexes == ["#000000"]


class TestAuditPalette:

    def test_pairs_against_dominant(self):
        palette = Palette(colors=(
            ColorSample.from_hex("#FFFFFF", 0.7),
            ColorSample.from_hex("#000000", 0.2),
            ColorSample.from_hex("#EEEEEE", 0.1),
        ))
        report = audit_palette(palette)
        assert [p.foreground for p in report.pairs] == ["#000000", "#EEEEEE"]
        assert report.pairs[0].ratio == pytest.approx(21.0)
        assert report.pairs[0].passes_aa
        assert not report.pairs[1].passes_aa
        assert not report.wcag_compliant

    def test_single_color(self):
        palette = Palette(colors=(ColorSample.from_hex("#FFFFFF", 1.0),))
        assert audit_palette(palette).pairs == ()

    def test_fallback_palette_is_not_audited(self):
        assert audit_palette(fallback_palette()).pairs == ()


class TestSpacing:

    def test_solid_image_uses_default_unit(self):
        spacing = detect_spacing(RasterImage(_solid_image(255, 255, 255)))
        assert spacing.base_unit == DEFAULT_BASE_UNIT
        assert spacing.common == ()
        assert spacing.scale[:3] == (8, 16, 24)
        assert len(spacing.scale) == 16

    def test_regular_stripes(self):
        spacing = detect_spacing(RasterImage(_stripes(10)))
        assert spacing.common == (10,)
        assert spacing.base_unit == 10
        assert spacing.scale[-1] == 160

    def test_base_unit_is_gcd(self):
        spacing = detect_spacing(RasterImage(_stripes(20)))
        assert set(spacing.common) == {10, 20}
        assert spacing.base_unit == 10

    def test_measurements_within_reach(self):
        values = measure_spacings(RasterImage(_stripes(10)), max_reach=50)
        assert values
        assert all(1 <= v < 50 for v in values)
