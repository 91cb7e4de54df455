# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""Integration tests for the analyze() and validate() pipelines."""

import json

import numpy as np
import pytest
from PIL import Image

from screenscore import AnalysisResult, ValidationResult, analyze, validate
from screenscore.measure import RasterImage, UnsupportedImageFormatError
from screenscore.runtime import (
    UnsupportedSourceError,
    load_analysis,
    load_validation,
    save_analysis,
    save_validation,
)
from screenscore.schema import DesignDescription


def _solid_image(r, g, b, height=100, width=100):
    """Create a solid-color image."""
    return np.full((height, width, 3), [r, g, b], dtype=np.uint8)


def _toss_screen(height=100, width=100):
    """Light background with a blue call-to-action band."""
    img = np.full((height, width, 3), [245, 247, 250], dtype=np.uint8)
    img[60:80, 10:90] = [0, 100, 255]
    return img


GOOD_HTML = (
    '<div class="app"><button onclick="go()">Go</button>'
    "<p>x</p><span>y</span><img src=\"z.png\"></div>"
)


class ScriptedOracle:
    """Describes with one canned answer and rates with another."""

    def __init__(self, description="{}", rating="{}"):
        self.description = description
        self.rating = rating

    def ask(self, prompt, images):
        return self.description if len(images) == 1 else self.rating


class FixedRenderer:

    def __init__(self, image):
        self.image = image
        self.rendered = []

    def render(self, source_path):
        self.rendered.append(source_path)
        return self.image


class BrokenRenderer:

    def render(self, source_path):
        raise RuntimeError("browser crashed")


class RejectingRenderer:

    def render(self, source_path):
        raise UnsupportedSourceError(f"cannot render {source_path}")


@pytest.fixture
def white_png(tmp_path):
    path = tmp_path / "original.png"
    Image.fromarray(_solid_image(255, 255, 255)).save(path)
    return path


@pytest.fixture
def good_html(tmp_path):
    path = tmp_path / "index.html"
    path.write_text(GOOD_HTML, encoding="utf-8")
    return path


TOSS_DESCRIPTION = json.dumps({
    "description": "토스 toss 송금 screen",
    "elements": [{"type": "button", "content": "보내기"}],
})


class TestAnalyze:

    def test_basic(self, white_png):
        result = analyze(white_png)
        assert isinstance(result, AnalysisResult)
        assert (result.width, result.height) == (100, 100)
        assert result.palette.hexes == ["#FFFFFF"]
        assert result.brand.brand is None
        assert result.description == DesignDescription()
        assert result.spacing.base_unit == 8
        assert result.image_hash.startswith("sha256:")

    def test_analysis_mode_breakdown(self, white_png):
        breakdown = analyze(white_png).quality.breakdown
        assert breakdown.visual_similarity == 70.0
        assert breakdown.layout_accuracy == 70.0
        assert breakdown.color_matching == pytest.approx(100.0)
        assert breakdown.brand_consistency == 0.0

    def test_neutral_metrics_raise_no_issues(self):
        quality = analyze(_solid_image(255, 255, 255, 40, 40)).quality
        assert quality.issues == ()
        assert quality.breakdown.visual_similarity < 80
        assert quality.breakdown.interaction_elements < 80

    def test_unmeasured_improvements_skipped(self, white_png):
        improvements = analyze(white_png).quality.improvements
        assert "레이아웃 간격과 비율을 원본과 정확히 일치시키세요" not in improvements
        assert "모든 클릭 가능한 요소에 적절한 이벤트 핸들러를 추가하세요" not in improvements
        # No brand was identified, so brand consistency is a measured 0
        assert "브랜드 아이덴티티를 정확히 반영하도록 디자인을 수정하세요" in improvements

    def test_brand_from_description(self):
        result = analyze(_toss_screen(), oracle=ScriptedOracle(description=TOSS_DESCRIPTION))
        assert result.brand.brand == "toss"
        assert result.brand.confidence == pytest.approx(0.6)
        assert result.description.from_oracle
        assert result.description.interactive_count == 1
        assert result.quality.breakdown.brand_consistency == pytest.approx(60.0)

    def test_accessibility_audit(self):
        result = analyze(_toss_screen())
        assert len(result.accessibility.pairs) == len(result.palette) - 1

    def test_deterministic(self):
        pixels = _toss_screen()
        assert analyze(pixels) == analyze(pixels)

    def test_failing_oracle_degrades(self):
        class Failing:
            def ask(self, prompt, images):
                raise ConnectionError("offline")

        result = analyze(_toss_screen(), oracle=Failing())
        assert result.description == DesignDescription()
        assert not result.palette.fallback

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            analyze(tmp_path / "missing.png")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "shot.webp"
        path.write_bytes(b"RIFF")
        with pytest.raises(UnsupportedImageFormatError):
            analyze(path)


class TestValidate:

    def test_perfect_reproduction(self, white_png, good_html):
        analysis = analyze(white_png)
        renderer = FixedRenderer(RasterImage(_solid_image(255, 255, 255)))
        result = validate(white_png, good_html, analysis, renderer=renderer)

        assert isinstance(result, ValidationResult)
        assert renderer.rendered == [good_html]
        assert result.comparison.similarity == 1.0
        assert result.comparison.differences == ()
        assert result.oracle.fallback
        breakdown = result.report.breakdown
        assert breakdown.as_dict() == {
            "visualSimilarity": 100.0,
            "layoutAccuracy": 100.0,
            "colorMatching": 70.0,
            "typographyMatch": 70.0,
            "interactionElements": 100.0,
            "brandConsistency": 100.0,
        }
        # 25 + 20 + 10.5 + 10.5 + 15 + 10
        assert result.overall_score == 91
        # stddev of (100, 100, 70, 70, 100, 100) is ~14.14
        assert result.report.confidence == 86
        assert result.report.issues == ()
        assert len(result.report.improvements) == 2 + 3
        assert result.code_suggestions == ()

    def test_oracle_scores_feed_breakdown(self, white_png, good_html):
        analysis = analyze(white_png)
        oracle = ScriptedOracle(rating='{"color": 95, "typography": 90, "layout": 10, "brand": 10}')
        result = validate(
            white_png, good_html, analysis,
            renderer=FixedRenderer(RasterImage(_solid_image(255, 255, 255))),
            oracle=oracle,
        )
        assert result.report.breakdown.color_matching == 95.0
        assert result.report.breakdown.typography_match == 90.0
        # Layout comes from the markup, not from the oracle
        assert result.report.breakdown.layout_accuracy == 100.0

    def test_render_failure_falls_back(self, white_png, good_html, caplog):
        analysis = analyze(white_png)
        with caplog.at_level("WARNING", logger="screenscore.runtime.pipeline"):
            result = validate(white_png, good_html, analysis, renderer=BrokenRenderer())
        assert result.comparison.fallback
        assert result.comparison.similarity == 0.5
        assert result.oracle.fallback
        assert result.report.breakdown.visual_similarity == 50.0
        assert result.report.issues[0].description == "시각적 유사도가 낮습니다"
        assert "Rendering" in caplog.text

    def test_unsupported_source_raises(self, white_png, tmp_path):
        source = tmp_path / "App.vue"
        source.write_text("<template></template>", encoding="utf-8")
        with pytest.raises(UnsupportedSourceError):
            validate(white_png, source, analyze(white_png), renderer=RejectingRenderer())

    def test_missing_source_raises(self, white_png, tmp_path):
        with pytest.raises(FileNotFoundError):
            validate(white_png, tmp_path / "none.html", analyze(white_png),
                     renderer=BrokenRenderer())

    def test_different_render(self, white_png, good_html):
        rendered = RasterImage(_solid_image(0, 0, 0, 50, 50))
        result = validate(white_png, good_html, analyze(white_png), renderer=FixedRenderer(rendered))
        assert (result.comparison.width, result.comparison.height) == (50, 50)
        assert result.comparison.similarity == pytest.approx(0.0)
        assert len(result.comparison.differences) == 100

    def test_brand_consistency_and_suggestions(self, tmp_path, good_html):
        original = tmp_path / "toss.png"
        Image.fromarray(_toss_screen()).save(original)
        oracle = ScriptedOracle(
            description=TOSS_DESCRIPTION,
            rating='{"color": 50, "typography": 60, "layout": 80, "brand": 40}',
        )
        analysis = analyze(original, oracle=oracle)
        result = validate(
            original, good_html, analysis,
            renderer=FixedRenderer(RasterImage(_toss_screen())),
            oracle=oracle,
        )
        # No #0064FF, no brand/system font, no border radius
        assert result.brand_consistency == 30.0
        assert result.report.breakdown.brand_consistency == 30.0
        assert "CSS에서 색상을 다음으로 변경하세요: background-color: #0064FF" in result.code_suggestions
        assert (
            "폰트를 다음으로 변경하세요: font-family: 'Toss Face', system-ui, sans-serif"
            in result.code_suggestions
        )

    def test_expected_interactions_from_analysis(self, tmp_path):
        original = tmp_path / "toss.png"
        Image.fromarray(_toss_screen()).save(original)
        analysis = analyze(original, oracle=ScriptedOracle(description=TOSS_DESCRIPTION))
        source = tmp_path / "plain.html"
        source.write_text("<div><p>no buttons</p></div>", encoding="utf-8")
        result = validate(
            original, source, analysis,
            renderer=FixedRenderer(RasterImage(_toss_screen())),
        )
        assert result.structure.interaction_score == 0.0
        assert result.report.breakdown.interaction_elements == 0.0


class TestPersistence:

    def test_analysis_round_trip(self, tmp_path):
        result = analyze(_toss_screen(), oracle=ScriptedOracle(description=TOSS_DESCRIPTION))
        path = save_analysis(tmp_path / "analysis.json", result)
        assert load_analysis(path) == result

    def test_analysis_file_is_utf8_json(self, tmp_path):
        result = analyze(_toss_screen(), oracle=ScriptedOracle(description=TOSS_DESCRIPTION))
        path = save_analysis(tmp_path / "analysis.json", result)
        text = path.read_text(encoding="utf-8")
        assert "토스" in text
        assert json.loads(text)["brand"]["brand"] == "toss"

    def test_validation_round_trip(self, tmp_path, white_png, good_html):
        rendered = RasterImage(_solid_image(0, 0, 0, 50, 50))
        result = validate(white_png, good_html, analyze(white_png), renderer=FixedRenderer(rendered))
        path = save_validation(tmp_path / "validation.json", result)
        assert load_validation(path) == result
