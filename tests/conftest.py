"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from sheetsync.engine.ids import IdGenerator
from sheetsync.engine.image import Image
from sheetsync.utils.png import encode_png

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


def solid(size: tuple[int, int], color: tuple[int, int, int, int]) -> Image:
    return Image.filled(size, color)


def write_png(path: Path, image: Image) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_png(image))
    return path


@pytest.fixture
def ids() -> IdGenerator:
    return IdGenerator()


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    """A small project: two PNGs in nested folders plus a non-image file."""
    root = tmp_path / "assets"
    write_png(root / "icons" / "a.png", solid((4, 4), RED))
    write_png(root / "b@2x.png", solid((2, 2), GREEN))
    (root / "notes.txt").write_text("not an image")
    return root
