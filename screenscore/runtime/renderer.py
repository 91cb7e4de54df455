# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Renderer boundary: generated UI source in, raster screenshot out.

The Playwright adapter requires: playwright (pip install screenscore[render])
and a Chromium build (playwright install chromium).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Union

from screenscore.measure.image import RasterImage

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = (".html", ".htm")

DEFAULT_VIEWPORT = (1200, 800)
DEFAULT_DEVICE_SCALE_FACTOR = 2


class UnsupportedSourceError(ValueError):
    """The renderer cannot render this kind of source file."""


class Renderer(Protocol):
    """Anything that can turn a UI source file into a screenshot."""

    def render(self, source_path: Union[str, Path]) -> RasterImage:
        ...


def is_available() -> bool:
    """Check if the Playwright adapter is available (playwright installed)."""
    try:
        import playwright.sync_api  # noqa: F401
        return True
    except ImportError:
        return False


def check_source(source_path: Union[str, Path]) -> Path:
    """
    Validate that ``source_path`` is a renderable HTML file.

    Raises:
        UnsupportedSourceError: Not an .html/.htm file (framework sources
            such as .jsx, .tsx, .vue or .dart included)
        FileNotFoundError: The file does not exist
    """
    path = Path(source_path)
    if path.suffix.lower() not in HTML_EXTENSIONS:
        raise UnsupportedSourceError(
            f"Cannot render {path.suffix or 'extensionless'} sources: {path}. "
            f"Supported: {', '.join(HTML_EXTENSIONS)}"
        )
    if not path.is_file():
        raise FileNotFoundError(f"Source file not found: {path}")
    return path


class PlaywrightRenderer:
    """
    Render HTML files in headless Chromium.

    Each call launches and closes its own browser, so one renderer can be
    shared between threads.

    Args:
        viewport: (width, height) in CSS pixels
        device_scale_factor: Pixel density of the screenshot
        timeout_ms: Page load timeout
    """

    def __init__(
        self,
        viewport: tuple[int, int] = DEFAULT_VIEWPORT,
        device_scale_factor: float = DEFAULT_DEVICE_SCALE_FACTOR,
        timeout_ms: int = 30000,
    ) -> None:
        self.viewport = viewport
        self.device_scale_factor = device_scale_factor
        self.timeout_ms = timeout_ms

    def render(self, source_path: Union[str, Path]) -> RasterImage:
        path = check_source(source_path)
        try:
            from playwright.sync_api import sync_playwright
        except ImportError as e:
            raise ImportError(
                "PlaywrightRenderer requires playwright. "
                "Install with: pip install screenscore[render]"
            ) from e

        html = path.read_text(encoding="utf-8")
        width, height = self.viewport
        logger.debug("Rendering %s at %dx%d@%sx", path, width, height, self.device_scale_factor)

        with sync_playwright() as p:
            browser = p.chromium.launch()
            try:
                page = browser.new_page(
                    viewport={"width": width, "height": height},
                    device_scale_factor=self.device_scale_factor,
                )
                page.set_default_timeout(self.timeout_ms)
                page.set_content(html, wait_until="networkidle")
                page.evaluate("document.fonts.ready")
                png = page.screenshot(clip={"x": 0, "y": 0, "width": width, "height": height})
            finally:
                browser.close()

        return RasterImage.from_bytes(png)
