"""Tests for RGBA8 images and blitting."""

from __future__ import annotations

import numpy as np
import pytest

from sheetsync.engine.image import BlitError, Image
from tests.conftest import BLUE, CLEAR, GREEN, RED, solid


class TestConstruction:
    def test_empty_is_transparent_black(self):
        img = Image.new_empty((3, 2))
        assert img.size == (3, 2)
        assert img.pixels.shape == (2, 3, 4)
        assert not img.pixels.any()

    def test_from_bytes(self):
        data = bytes(range(2 * 1 * 4))
        img = Image((2, 1), data)
        assert img.get_pixel(0, 0) == (0, 1, 2, 3)
        assert img.get_pixel(1, 0) == (4, 5, 6, 7)
        assert img.to_bytes() == data

    def test_wrong_buffer_length(self):
        with pytest.raises(ValueError):
            Image((2, 2), bytes(15))

    def test_wrong_array_shape(self):
        with pytest.raises(ValueError):
            Image((2, 2), np.zeros((2, 2, 3), dtype=np.uint8))

    def test_wrong_dtype(self):
        with pytest.raises(ValueError):
            Image((1, 1), np.zeros((1, 1, 4), dtype=np.float32))


class TestPixels:
    def test_set_and_get(self):
        img = Image.new_empty((4, 4))
        img.set_pixel(3, 1, BLUE)
        assert img.get_pixel(3, 1) == BLUE
        assert img.get_pixel(1, 3) == CLEAR

    def test_out_of_bounds(self):
        img = Image.new_empty((4, 4))
        with pytest.raises(IndexError):
            img.get_pixel(4, 0)
        with pytest.raises(IndexError):
            img.set_pixel(0, -1, RED)


class TestBlit:
    def test_blit_same_size(self):
        source = solid((17, 20), GREEN)
        target = Image.new_empty((17, 20))
        target.blit(source, (0, 0))
        assert target == source

    def test_blit_corner(self):
        canvas = solid((8, 8), BLUE)
        source = Image((4, 4), np.arange(64, dtype=np.uint8).reshape(4, 4, 4))

        canvas.blit(source, (4, 4))

        assert np.array_equal(canvas.pixels[4:8, 4:8], source.pixels)
        assert (canvas.pixels[0:4, 0:4] == BLUE).all()
        assert (canvas.pixels[0:4, 4:8] == BLUE).all()
        assert (canvas.pixels[4:8, 0:4] == BLUE).all()

    def test_overwrites_alpha(self):
        canvas = solid((2, 2), RED)
        canvas.blit(Image.new_empty((1, 1)), (1, 0))
        assert canvas.get_pixel(1, 0) == CLEAR
        assert canvas.get_pixel(0, 0) == RED

    def test_respects_destination_stride(self):
        canvas = Image.new_empty((5, 3))
        source = solid((2, 2), RED)
        canvas.blit(source, (3, 1))
        assert canvas.get_pixel(3, 1) == RED
        assert canvas.get_pixel(4, 2) == RED
        assert canvas.get_pixel(0, 2) == CLEAR
        assert canvas.get_pixel(2, 1) == CLEAR

    @pytest.mark.parametrize("position", [(5, 4), (4, 5), (7, 0), (-1, 0)])
    def test_out_of_bounds_fails(self, position):
        canvas = Image.new_empty((8, 8))
        before = canvas.copy()
        with pytest.raises(BlitError):
            canvas.blit(solid((4, 4), RED), position)
        assert canvas == before

    def test_blit_onto_itself_fails(self):
        img = solid((2, 2), RED)
        with pytest.raises(BlitError):
            img.blit(img, (0, 0))
