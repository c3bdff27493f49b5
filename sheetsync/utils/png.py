"""PNG codec adapter. Pillow handles the byte stream; the engine only sees RGBA8 buffers."""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from sheetsync.engine.image import Image


class ImageDecodeError(ValueError):
    """Bytes could not be decoded as an image."""


def decode_png(data: bytes) -> Image:
    """Decode image bytes to RGBA8, converting other colour modes."""
    try:
        with PILImage.open(io.BytesIO(data)) as pil:
            rgba = pil.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e

    return Image(rgba.size, np.array(rgba, dtype=np.uint8))


def encode_png(image: Image) -> bytes:
    buf = io.BytesIO()
    PILImage.fromarray(image.pixels).save(buf, format="PNG")
    return buf.getvalue()


def read_png(path: str | Path) -> Image:
    with open(path, "rb") as f:
        return decode_png(f.read())
