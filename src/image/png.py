"""PNG: a 2D grid of HSLA pixels.

Pixels live in a float64 array of shape (height, width, 4) holding
(h, s, l, a) per pixel, so pixel (x, y) is ``pixels[y, x]``. File I/O goes
through Pillow as 8-bit RGBA.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from src.app.errors import ImageReadError, ImageWriteError
from src.pixel.convert import hsl_to_rgb, rgb_to_hsl
from src.pixel.hsla import HSLAPixel


class PNG:
    """An in-memory HSLA image."""

    def __init__(self, width: int = 0, height: int = 0, fill: HSLAPixel | None = None):
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        fill = fill if fill is not None else HSLAPixel()
        self._pixels = np.empty((height, width, 4), dtype=np.float64)
        self._pixels[:, :] = fill.to_tuple()

    # ------------------------------------------------------------------
    # Dimensions and pixel access
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixels(self) -> np.ndarray:
        """Live (height, width, 4) view of the pixel data."""
        return self._pixels

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of range for {self.width}x{self.height} image"
            )

    def get_pixel(self, x: int, y: int) -> HSLAPixel:
        self._check_bounds(x, y)
        return HSLAPixel.from_tuple(self._pixels[y, x])

    def set_pixel(self, x: int, y: int, pixel: HSLAPixel) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = pixel.to_tuple()

    # ------------------------------------------------------------------
    # Whole-image operations
    # ------------------------------------------------------------------

    def copy(self) -> PNG:
        return PNG.from_array(self._pixels)

    def resize(self, width: int, height: int) -> None:
        """Resize in place, keeping the overlapping top-left region.

        Newly exposed pixels get the default pixel value.
        """
        resized = PNG(width, height)
        w = min(width, self.width)
        h = min(height, self.height)
        resized._pixels[:h, :w] = self._pixels[:h, :w]
        self._pixels = resized._pixels

    def __eq__(self, other) -> bool:
        if not isinstance(other, PNG):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and np.array_equal(
            self._pixels, other._pixels
        )

    def __repr__(self) -> str:
        return f"PNG({self.width}x{self.height})"

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PNG:
        """Build from an (H, W, 4) HSLA array. The data is copied."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {arr.shape}")
        img = cls()
        img._pixels = arr.copy()
        return img

    # ------------------------------------------------------------------
    # Pillow conversion and file I/O
    # ------------------------------------------------------------------

    @classmethod
    def from_pil(cls, image: Image.Image) -> PNG:
        rgba = np.asarray(image.convert("RGBA")).astype(np.float64) / 255.0
        hsl = rgb_to_hsl(rgba[:, :, 0], rgba[:, :, 1], rgba[:, :, 2])
        return cls.from_array(np.concatenate([hsl, rgba[:, :, 3:4]], axis=2))

    def to_pil(self) -> Image.Image:
        rgb = hsl_to_rgb(self._pixels[:, :, 0], self._pixels[:, :, 1], self._pixels[:, :, 2])
        alpha = np.clip(self._pixels[:, :, 3:4], 0.0, 1.0)
        rgba = np.concatenate([rgb, alpha], axis=2)
        return Image.fromarray(np.round(rgba * 255).astype(np.uint8))

    @classmethod
    def read_from_file(cls, path: str | Path) -> PNG:
        try:
            with Image.open(path) as im:
                return cls.from_pil(im)
        except OSError as e:
            raise ImageReadError(f"Cannot read image {path}: {e}") from e

    def write_to_file(self, path: str | Path) -> None:
        try:
            self.to_pil().save(path, format="PNG")
        except (OSError, ValueError) as e:
            raise ImageWriteError(f"Cannot write image {path}: {e}") from e
