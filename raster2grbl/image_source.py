"""Pixel sources for the encoder.

The encoder only needs width, height, a name, and one row of 8-bit samples
at a time. ``RasterImage`` adapts the common ways a host hands over pixels:
a Pillow image, a numpy array, or a raw interleaved buffer with a given
number of bytes per pixel (only byte 0 of each pixel is used).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from .errors import InvalidImageDimensionsError


class RasterImage:
    """Read-only 8-bit grayscale raster, row 0 at the top."""

    def __init__(self, pixels: np.ndarray, name: str = ""):
        if pixels.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {pixels.shape}")
        height, width = pixels.shape
        if width < 1 or height < 1:
            raise InvalidImageDimensionsError(
                f"Image must be at least 1x1 px (got {width}x{height})"
            )
        self._pixels = np.array(pixels, dtype=np.uint8)
        self._pixels.setflags(write=False)
        self.name = name
        self.bytes_per_pixel = 1

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def row(self, y: int) -> np.ndarray:
        """Copy of the samples of source row ``y`` (0 = top row)."""
        return self._pixels[y].copy()

    @classmethod
    def from_array(cls, pixels, name: str = "") -> "RasterImage":
        """Build from a 2D array-like of 0..255 values (row-major, top row first)."""
        arr = np.asarray(pixels)
        if arr.ndim == 3:
            # Multi-channel: keep the first channel only
            arr = arr[:, :, 0]
        if arr.ndim != 2:
            raise InvalidImageDimensionsError(f"Unsupported array shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise InvalidImageDimensionsError(
                f"Image must be at least 1x1 px (got {arr.shape[1]}x{arr.shape[0]})"
            )
        return cls(arr.astype(np.uint8), name=name)

    @classmethod
    def from_buffer(
        cls,
        data: Union[bytes, bytearray, memoryview],
        width: int,
        height: int,
        bytes_per_pixel: int = 1,
        name: str = "",
    ) -> "RasterImage":
        """Build from a raw interleaved pixel buffer as supplied by a host.

        Args:
            data: ``width * height * bytes_per_pixel`` bytes, top row first
            width: Drawable width in pixels
            height: Drawable height in pixels
            bytes_per_pixel: Storage size of one pixel; byte 0 is the sample

        Raises:
            InvalidImageDimensionsError: width/height < 1
            ValueError: bytes_per_pixel < 1 or buffer too short
        """
        if width < 1 or height < 1:
            raise InvalidImageDimensionsError(
                f"Image must be at least 1x1 px (got {width}x{height})"
            )
        if bytes_per_pixel < 1:
            raise ValueError(f"bytes_per_pixel must be >= 1 (got {bytes_per_pixel})")

        expected = width * height * bytes_per_pixel
        buf = np.frombuffer(data, dtype=np.uint8)
        if buf.size < expected:
            raise ValueError(f"Pixel buffer too short: {buf.size} bytes (need {expected})")

        pixels = buf[:expected].reshape(height, width, bytes_per_pixel)[:, :, 0]
        img = cls(pixels, name=name)
        img.bytes_per_pixel = bytes_per_pixel
        return img

    @classmethod
    def from_pil(cls, img: Image.Image, name: Optional[str] = None) -> "RasterImage":
        """Build from a Pillow image.

        Grayscale ("L") is used as-is. Grayscale with alpha and other
        multi-band modes use their first band. 16/32-bit integer modes use
        byte 0 of each pixel in Pillow's raw storage. Anything else is
        converted with Pillow's luminance conversion.
        """
        if name is None:
            name = getattr(img, "filename", "") or ""

        mode = img.mode
        if mode == "L":
            arr = np.array(img, dtype=np.uint8)
            bpp = 1
        elif mode == "LA":
            arr = np.array(img.getchannel(0), dtype=np.uint8)
            bpp = 2
        elif mode in ("I;16", "I;16L", "I;16B", "I"):
            # Byte 0 of each pixel as stored: the high byte for I;16B
            bpp = 4 if mode == "I" else 2
            raw = np.frombuffer(img.tobytes(), dtype=np.uint8)
            arr = raw.reshape(img.height, img.width, bpp)[:, :, 0]
        else:
            arr = np.array(img.convert("L"), dtype=np.uint8)
            bpp = len(img.getbands())

        out = cls(arr, name=str(name))
        out.bytes_per_pixel = bpp
        return out

    @classmethod
    def open(cls, path: Union[str, Path]) -> "RasterImage":
        """Load an image file with Pillow."""
        with Image.open(path) as img:
            img.load()
            return cls.from_pil(img, name=str(path))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(np.array(self._pixels))

    def __repr__(self) -> str:
        return f"RasterImage({self.width}x{self.height}, name={self.name!r})"
