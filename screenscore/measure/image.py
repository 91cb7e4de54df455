# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Raster image decoding and resizing.

A RasterImage is an immutable RGB or RGBA pixel buffer. Resizing and
channel conversion always produce a new instance; the buffer of an
existing instance is read-only.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError


SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp")


class ImageDecodeError(ValueError):
    """The file exists but its pixels or dimensions could not be read."""


class UnsupportedImageFormatError(ValueError):
    """The file extension is not one of SUPPORTED_EXTENSIONS."""


@dataclass(frozen=True, slots=True, eq=False)
class RasterImage:
    """
    Decoded image pixels.

    Attributes:
        pixels: uint8 array of shape (H, W, 3) or (H, W, 4), row-major
    """
    pixels: NDArray[np.uint8]

    def __post_init__(self) -> None:
        """Validate the buffer and freeze it."""
        if not isinstance(self.pixels, np.ndarray):
            raise TypeError(f"Expected numpy array, got {type(self.pixels)}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W, 3) or (H, W, 4) array, got shape {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {self.pixels.dtype}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise ValueError(f"Image has no pixels: shape {self.pixels.shape}")
        if self.pixels.flags.writeable:
            frozen = self.pixels.copy()
            frozen.flags.writeable = False
            object.__setattr__(self, "pixels", frozen)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def has_alpha(self) -> bool:
        return self.pixels.shape[2] == 4

    def rgb(self) -> NDArray[np.uint8]:
        """(H, W, 3) view of the color channels, alpha dropped."""
        return self.pixels[:, :, :3]

    def to_pil(self) -> Image.Image:
        """Pillow copy of this image (RGB or RGBA)."""
        return Image.fromarray(np.ascontiguousarray(self.pixels), "RGBA" if self.has_alpha else "RGB")

    def resize(
        self,
        width: int,
        height: int,
        resample: Image.Resampling = Image.Resampling.BILINEAR,
    ) -> RasterImage:
        """
        Return a resized copy.

        Returns self unchanged when the size already matches.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Target size must be positive, got {width}x{height}")
        if (width, height) == (self.width, self.height):
            return self
        resized = self.to_pil().resize((width, height), resample)
        return RasterImage(np.array(resized, dtype=np.uint8))

    @classmethod
    def from_pil(cls, img: Image.Image) -> RasterImage:
        """Build from a Pillow image, converting palette/gray modes to RGB."""
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
        return cls(np.array(img, dtype=np.uint8))

    @classmethod
    def from_bytes(cls, data: bytes) -> RasterImage:
        """Decode an encoded image (PNG, JPEG, ...) held in memory."""
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return cls.from_pil(_to_srgb(img))
        except (UnidentifiedImageError, OSError) as e:
            raise ImageDecodeError(f"Could not decode image bytes: {e}") from e


def load_image(image: Union[str, Path, RasterImage, NDArray[np.uint8]]) -> RasterImage:
    """
    Decode an image from disk, or wrap an array.

    Applies ICC profile conversion to sRGB if the file has an embedded
    color profile, so sampled colors match what color pickers show.

    Raises:
        FileNotFoundError: The path does not exist
        UnsupportedImageFormatError: The extension is not supported
        ImageDecodeError: The file could not be decoded
        TypeError: The argument is neither a path, an array nor a RasterImage
    """
    if isinstance(image, RasterImage):
        return image

    if isinstance(image, np.ndarray):
        return RasterImage(image)

    if not isinstance(image, (str, Path)):
        raise TypeError(
            f"Expected file path, numpy array or RasterImage, got {type(image)}"
        )

    path = Path(image)
    if not path.is_file():
        raise FileNotFoundError(f"Image file not found: {path}")

    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedImageFormatError(
            f"Unsupported image format: {ext or '(none)'} "
            f"(expected one of {', '.join(SUPPORTED_EXTENSIONS)})"
        )

    try:
        with Image.open(path) as img:
            img.load()
            if not img.width or not img.height:
                raise ImageDecodeError(f"Could not read image dimensions: {path}")
            return RasterImage.from_pil(_to_srgb(img))
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not decode image {path}: {e}") from e


def _to_srgb(img: Image.Image) -> Image.Image:
    """Convert an image with an embedded ICC profile to sRGB."""
    if "icc_profile" not in img.info:
        return img
    try:
        from PIL import ImageCms

        embedded_profile = ImageCms.ImageCmsProfile(io.BytesIO(img.info["icc_profile"]))
        srgb_profile = ImageCms.createProfile("sRGB")
        if img.mode != "RGB":
            img = img.convert("RGB")
        return ImageCms.profileToProfile(img, embedded_profile, srgb_profile)
    except Exception:
        # Unusable profile: keep the pixels as stored
        return img.convert("RGB") if img.mode != "RGB" else img
