# -*- coding: utf-8 -*-
"""
Raster Image Module

In-memory raster contract shared by every stage: an explicit width/height
plus a row-major RGBA8 pixel buffer, held as a numpy array shaped
(height, width, 4).

Classes:
    RasterImage: Fixed-size RGBA8 pixel buffer
"""

from io import BytesIO
from typing import Tuple

import numpy as np
from PIL import Image


class RasterImage:
    """
    Row-major RGBA8 raster.

    Stages never mutate a raster they received; they work on ``copy()`` and
    return the copy, so the previous buffer stays usable as a fallback.

    Example:
        >>> img = RasterImage.blank(4, 2, (255, 255, 255, 255))
        >>> img.width, img.height, img.pixels.shape
        (4, 2, (2, 4, 4))
    """

    __slots__ = ('pixels',)

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected an (height, width, 4) array, got {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @classmethod
    def blank(cls, width: int, height: int, color: Tuple[int, int, int, int]) -> 'RasterImage':
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @classmethod
    def from_pil(cls, image: Image.Image) -> 'RasterImage':
        return cls(np.array(image.convert('RGBA')))

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> 'RasterImage':
        """Wrap a raw row-major RGBA8 buffer."""
        flat = np.frombuffer(data, dtype=np.uint8)
        if flat.size != width * height * 4:
            raise ValueError(f"Buffer holds {flat.size} bytes, expected {width * height * 4}")
        return cls(flat.reshape((height, width, 4)).copy())

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_png(self) -> bytes:
        buf = BytesIO()
        self.to_pil().save(buf, format='PNG')
        return buf.getvalue()

    def copy(self) -> 'RasterImage':
        return RasterImage(self.pixels.copy())

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        return tuple(int(v) for v in self.pixels[y, x])

    def __eq__(self, other) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and bool(np.array_equal(self.pixels, other.pixels))

    __hash__ = None

    def __repr__(self) -> str:
        return f"RasterImage(width={self.width}, height={self.height})"
