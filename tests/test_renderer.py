# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""Tests for the renderer boundary."""

import io
import sys
from contextlib import contextmanager
from types import ModuleType

import numpy as np
import pytest
from PIL import Image

from screenscore.runtime.renderer import (
    PlaywrightRenderer,
    UnsupportedSourceError,
    check_source,
)


def _png_bytes(width, height, rgb=(0, 100, 255)):
    buf = io.BytesIO()
    Image.fromarray(np.full((height, width, 3), rgb, dtype=np.uint8)).save(buf, format="PNG")
    return buf.getvalue()


class _FakePage:

    def __init__(self, log, png):
        self.log = log
        self.png = png

    def set_default_timeout(self, ms):
        self.log.append(("timeout", ms))

    def set_content(self, html, wait_until=None):
        self.log.append(("content", html))

    def evaluate(self, expression):
        self.log.append(("evaluate", expression))

    def screenshot(self, clip=None):
        self.log.append(("screenshot", clip))
        return self.png


class _FakeBrowser:

    def __init__(self, log, png):
        self.log = log
        self.png = png

    def new_page(self, viewport=None, device_scale_factor=None):
        self.log.append(("page", viewport, device_scale_factor))
        return _FakePage(self.log, self.png)

    def close(self):
        self.log.append(("close",))


@pytest.fixture
def fake_playwright(monkeypatch):
    """Install a stand-in playwright.sync_api and return its call log."""
    log = []
    png = _png_bytes(12, 8)

    @contextmanager
    def sync_playwright():
        chromium = type("Chromium", (), {"launch": lambda self: _FakeBrowser(log, png)})()
        yield type("Playwright", (), {"chromium": chromium})()

    sync_api = ModuleType("playwright.sync_api")
    sync_api.sync_playwright = sync_playwright
    package = ModuleType("playwright")
    package.sync_api = sync_api
    monkeypatch.setitem(sys.modules, "playwright", package)
    monkeypatch.setitem(sys.modules, "playwright.sync_api", sync_api)
    return log


class TestCheckSource:

    @pytest.mark.parametrize("name", ["App.jsx", "App.tsx", "App.vue", "main.dart", "page.txt", "noext"])
    def test_rejects_non_html(self, tmp_path, name):
        path = tmp_path / name
        path.write_text("x", encoding="utf-8")
        with pytest.raises(UnsupportedSourceError):
            check_source(path)

    def test_unsupported_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            check_source(tmp_path / "App.vue")

    def test_missing_html(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            check_source(tmp_path / "index.html")

    @pytest.mark.parametrize("name", ["index.html", "index.HTM"])
    def test_accepts_html(self, tmp_path, name):
        path = tmp_path / name
        path.write_text("<html></html>", encoding="utf-8")
        assert check_source(path) == path


class TestPlaywrightRenderer:

    def test_defaults(self):
        renderer = PlaywrightRenderer()
        assert renderer.viewport == (1200, 800)
        assert renderer.device_scale_factor == 2

    def test_rejects_before_launching(self, tmp_path, fake_playwright):
        with pytest.raises(UnsupportedSourceError):
            PlaywrightRenderer().render(tmp_path / "App.tsx")
        assert fake_playwright == []

    def test_render(self, tmp_path, fake_playwright):
        path = tmp_path / "index.html"
        path.write_text("<h1>토스</h1>", encoding="utf-8")
        image = PlaywrightRenderer(viewport=(12, 8), device_scale_factor=1).render(path)

        assert (image.width, image.height) == (12, 8)
        assert tuple(image.pixels[0, 0]) == (0, 100, 255)
        assert ("page", {"width": 12, "height": 8}, 1) in fake_playwright
        assert ("content", "<h1>토스</h1>") in fake_playwright
        assert ("evaluate", "document.fonts.ready") in fake_playwright
        assert ("screenshot", {"x": 0, "y": 0, "width": 12, "height": 8}) in fake_playwright
        assert fake_playwright[-1] == ("close",)

    def test_missing_dependency(self, tmp_path, monkeypatch):
        path = tmp_path / "index.html"
        path.write_text("<p></p>", encoding="utf-8")
        monkeypatch.setitem(sys.modules, "playwright", None)
        monkeypatch.setitem(sys.modules, "playwright.sync_api", None)
        with pytest.raises(ImportError, match="screenscore\\[render\\]"):
            PlaywrightRenderer().render(path)
