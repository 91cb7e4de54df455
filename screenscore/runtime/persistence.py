# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""Persisting analysis and validation results as UTF-8 JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from screenscore.schema import AnalysisResult, ValidationResult


def save_analysis(path: Union[str, Path], result: AnalysisResult) -> Path:
    """Write ``result`` to ``path`` as JSON and return the path."""
    path = Path(path)
    path.write_text(result.to_json(indent=2), encoding="utf-8")
    return path


def load_analysis(path: Union[str, Path]) -> AnalysisResult:
    """Read an AnalysisResult written by ``save_analysis``."""
    return AnalysisResult.from_json(Path(path).read_text(encoding="utf-8"))


def save_validation(path: Union[str, Path], result: ValidationResult) -> Path:
    """Write ``result`` to ``path`` as JSON and return the path."""
    path = Path(path)
    path.write_text(result.to_json(indent=2), encoding="utf-8")
    return path


def load_validation(path: Union[str, Path]) -> ValidationResult:
    """Read a ValidationResult written by ``save_validation``."""
    return ValidationResult.from_json(Path(path).read_text(encoding="utf-8"))
