"""RGBA8 pixel buffers and the compositor.

Images are stored as ``(height, width, 4)`` uint8 arrays, row-major, so the
flat byte layout matches a decoded PNG scanline buffer.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from sheetsync.utils.geometry import Point, Size

_CHANNELS = 4

Pixel = tuple[int, int, int, int]


class BlitError(ValueError):
    """Source image does not fit in the destination at the requested position."""


class Image:
    """A width x height RGBA8 image that owns its pixel buffer."""

    def __init__(self, size: Size, pixels: NDArray[np.uint8] | bytes | bytearray | None = None) -> None:
        width, height = int(size[0]), int(size[1])
        if width < 0 or height < 0:
            raise ValueError(f"Image size must be non-negative, got {width}x{height}")

        if pixels is None:
            data = np.zeros((height, width, _CHANNELS), dtype=np.uint8)
        elif isinstance(pixels, (bytes, bytearray)):
            expected = width * height * _CHANNELS
            if len(pixels) != expected:
                raise ValueError(
                    f"RGBA8 buffer for {width}x{height} must be {expected} bytes, got {len(pixels)}"
                )
            data = np.frombuffer(bytes(pixels), dtype=np.uint8).reshape(height, width, _CHANNELS).copy()
        else:
            data = np.asarray(pixels)
            if data.dtype != np.uint8:
                raise ValueError(f"Pixel array must be uint8, got {data.dtype}")
            if data.shape != (height, width, _CHANNELS):
                raise ValueError(
                    f"Pixel array shape {data.shape} does not match {(height, width, _CHANNELS)}"
                )
            data = data.copy()

        self._size: Size = (width, height)
        self.pixels: NDArray[np.uint8] = data

    @classmethod
    def new_empty(cls, size: Size) -> Image:
        """Fully transparent black image."""
        return cls(size)

    @classmethod
    def filled(cls, size: Size, color: Pixel) -> Image:
        img = cls(size)
        img.pixels[:, :] = color
        return img

    @property
    def size(self) -> Size:
        return self._size

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self._size == other._size and np.array_equal(self.pixels, other.pixels)

    def copy(self) -> Image:
        return Image(self._size, self.pixels.copy())

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")

    def get_pixel(self, x: int, y: int) -> Pixel:
        self._check_bounds(x, y)
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def set_pixel(self, x: int, y: int, color: Pixel) -> None:
        self._check_bounds(x, y)
        self.pixels[y, x] = color

    def blit(self, other: Image, position: Point) -> None:
        """Copy ``other`` into this image with its top-left corner at ``position``.

        Destination pixels are overwritten exactly, alpha included. Raises
        ``BlitError`` if any part of ``other`` would land outside this image.
        """
        if other is self:
            raise BlitError("Cannot blit an image onto itself")

        x, y = position
        w, h = other.size
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise BlitError(
                f"Cannot blit {w}x{h} image at ({x}, {y}) into {self.width}x{self.height} image"
            )

        self.pixels[y : y + h, x : x + w] = other.pixels
