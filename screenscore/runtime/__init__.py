# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Runtime layer for Screenscore.

Pipelines that wire the measurement, brand and quality modules together,
the boundaries to external collaborators (vision model, renderer) and
result persistence.
"""

from screenscore.runtime.oracle import (
    OpenAIVisionOracle,
    VisionOracle,
    describe_design,
    parse_json_response,
    rate_reproduction,
)
from screenscore.runtime.persistence import (
    load_analysis,
    load_validation,
    save_analysis,
    save_validation,
)
from screenscore.runtime.pipeline import analyze, validate
from screenscore.runtime.renderer import (
    PlaywrightRenderer,
    Renderer,
    UnsupportedSourceError,
)

__all__ = [
    # Pipelines
    "analyze",
    "validate",
    # Oracle
    "VisionOracle",
    "OpenAIVisionOracle",
    "parse_json_response",
    "describe_design",
    "rate_reproduction",
    # Renderer
    "Renderer",
    "PlaywrightRenderer",
    "UnsupportedSourceError",
    # Persistence
    "save_analysis",
    "load_analysis",
    "save_validation",
    "load_validation",
]
