# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Vision-model oracle boundary.

The pipeline treats the vision model as an untrusted collaborator behind a
single method:

    ask(prompt, images) -> str

Everything here turns that free-text answer into typed values with
deterministic fallbacks, so a missing, failing or nonsensical model never
changes the shape of a result.

The OpenAI adapter requires: openai (pip install screenscore[vision]).
"""

from __future__ import annotations

import base64
import io
import json
import logging
import os
import re
from typing import Any, Optional, Protocol, Sequence

from screenscore.schema import NEUTRAL_SCORE, DesignDescription, OracleScores
from screenscore.measure.image import RasterImage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 2000

INTERACTIVE_ELEMENT_TYPES = frozenset({"button", "input", "link", "navigation"})


class VisionOracle(Protocol):
    """Anything that can answer a prompt about one or more images."""

    def ask(self, prompt: str, images: Sequence[RasterImage]) -> str:
        ...


def is_available() -> bool:
    """Check if the OpenAI adapter is available (openai installed)."""
    try:
        import openai  # noqa: F401
        return True
    except ImportError:
        return False


class OpenAIVisionOracle:
    """
    VisionOracle backed by the OpenAI chat completions API.

    Images are sent inline as base64 PNG data URLs.

    Args:
        api_key: Defaults to the OPENAI_API_KEY environment variable
        model: Defaults to SCREENSCORE_VISION_MODEL, then "gpt-4o"
        max_tokens: Completion budget per call
        timeout: Request timeout in seconds
        client: Pre-built client; skips constructing one
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float = 60.0,
        client: Any = None,
    ) -> None:
        self.model = model or os.environ.get("SCREENSCORE_VISION_MODEL", DEFAULT_MODEL)
        self.max_tokens = max_tokens
        if client is None:
            try:
                from openai import OpenAI
            except ImportError as e:
                raise ImportError(
                    "OpenAIVisionOracle requires openai. "
                    "Install with: pip install screenscore[vision]"
                ) from e
            client = OpenAI(
                api_key=api_key or os.environ.get("OPENAI_API_KEY"),
                timeout=timeout,
            )
        self._client = client

    def ask(self, prompt: str, images: Sequence[RasterImage]) -> str:
        content: list[dict] = [{"type": "text", "text": prompt}]
        for image in images:
            content.append({
                "type": "image_url",
                "image_url": {"url": to_data_url(image), "detail": "high"},
            })
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": content}],
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""


def to_data_url(image: RasterImage) -> str:
    """Encode an image as a PNG data URL."""
    buf = io.BytesIO()
    image.to_pil().save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


# =============================================================================
# Response parsing
# =============================================================================

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def parse_json_response(text: str) -> Optional[dict]:
    """
    Extract the first JSON object from a model answer.

    Markdown code fences are unwrapped first. Returns None when no object
    can be decoded.

    Example:
        >>> parse_json_response('Sure!\\n```json\\n{"color": 90}\\n```')
        {'color': 90}
    """
    if not text:
        return None
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1)

    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    return None


def _number(value: Any, default: float) -> float:
    """Finite float from a JSON value, or ``default``."""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return number


def _score(value: Any, default: float = NEUTRAL_SCORE) -> float:
    return min(100.0, max(0.0, _number(value, default)))


def _section(data: dict, key: str) -> dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


# =============================================================================
# Design description (analysis mode)
# =============================================================================

DESCRIBE_PROMPT = """Analyze this UI/UX screenshot and describe it.

Return a JSON object with this structure:
{
  "description": "one paragraph naming the product, brand and visible text",
  "elements": [
    {"type": "button|input|link|text|image|container|header|footer|navigation|card",
     "content": "text content if applicable"}
  ],
  "layout": {"type": "grid|flexbox|absolute|flow", "direction": "row|column"},
  "typography": {
    "primaryFont": "font-family",
    "headingSizes": [32, 24, 20, 18],
    "bodySize": 16,
    "lineHeight": 1.5
  },
  "designSystem": {"theme": "light|dark|mixed"}
}"""


def describe_design(oracle: Optional[VisionOracle], image: RasterImage) -> DesignDescription:
    """
    Ask the oracle to describe a screenshot.

    Fields the model returns are merged over DesignDescription defaults;
    fields it omits or garbles keep their defaults. Without an oracle, or
    when the call or parsing fails, the defaults are returned with empty
    text.
    """
    default = DesignDescription()
    if oracle is None:
        return default

    try:
        answer = oracle.ask(DESCRIBE_PROMPT, [image])
    except Exception:
        logger.warning("Vision oracle failed to describe the design", exc_info=True)
        return default

    data = parse_json_response(answer)
    if data is None:
        logger.warning("Vision oracle returned no JSON description")
        return default

    layout = _section(data, "layout")
    typography = _section(data, "typography")
    design_system = _section(data, "designSystem")

    elements = data.get("elements")
    if not isinstance(elements, list):
        elements = []
    elements = [e for e in elements if isinstance(e, dict)]

    texts = []
    if isinstance(data.get("description"), str):
        texts.append(data["description"])
    texts.extend(e["content"] for e in elements if isinstance(e.get("content"), str))

    headings = typography.get("headingSizes")
    if isinstance(headings, list) and headings:
        heading_sizes = tuple(_number(h, 0.0) for h in headings)
    else:
        heading_sizes = default.heading_sizes

    def text_field(section: dict, key: str, fallback: str) -> str:
        value = section.get(key)
        return value if isinstance(value, str) and value else fallback

    return DesignDescription(
        text=" ".join(texts),
        layout=text_field(layout, "type", default.layout),
        direction=text_field(layout, "direction", default.direction),
        theme=text_field(design_system, "theme", default.theme),
        primary_font=text_field(typography, "primaryFont", default.primary_font),
        body_size=_number(typography.get("bodySize"), default.body_size),
        heading_sizes=heading_sizes,
        line_height=_number(typography.get("lineHeight"), default.line_height),
        element_count=len(elements),
        interactive_count=sum(
            1 for e in elements if str(e.get("type", "")).lower() in INTERACTIVE_ELEMENT_TYPES
        ),
        from_oracle=True,
    )


# =============================================================================
# Reproduction rating (validation mode)
# =============================================================================

RATE_PROMPT = """Compare the original UI screenshot (first image) with the
generated reproduction (second image).

Score each criterion from 0 to 100:
1. color: color accuracy
2. typography: font family, size and weight match
3. layout: layout structure and spacing
4. brand: brand consistency

Explain the concrete differences in "details".
Return only a JSON object:
{"color": 0, "typography": 0, "layout": 0, "brand": 0, "details": "..."}"""


def rate_reproduction(
    oracle: Optional[VisionOracle],
    original: RasterImage,
    rendered: RasterImage,
) -> OracleScores:
    """
    Ask the oracle to score a reproduction against its source.

    Each score is clamped to [0, 100]; a missing or non-numeric score is
    neutral on its own. If there is no oracle or the call fails, every
    score is neutral and ``fallback`` is set.
    """
    if oracle is None:
        return OracleScores(fallback=True)

    try:
        answer = oracle.ask(RATE_PROMPT, [original, rendered])
    except Exception:
        logger.warning("Vision oracle failed to rate the reproduction", exc_info=True)
        return OracleScores(fallback=True)

    data = parse_json_response(answer) or {}
    details = data.get("details")
    return OracleScores(
        color=_score(data.get("color")),
        typography=_score(data.get("typography")),
        layout=_score(data.get("layout")),
        brand=_score(data.get("brand")),
        details=details if isinstance(details, str) else answer,
    )
