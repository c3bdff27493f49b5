"""Tests for alpha bleeding."""

from __future__ import annotations

import numpy as np

from sheetsync.engine.alpha_bleed import alpha_bleed
from sheetsync.engine.image import Image
from tests.conftest import BLUE, CLEAR, GREEN, RED, solid


def _row(*colors):
    img = Image.new_empty((len(colors), 1))
    for x, color in enumerate(colors):
        img.set_pixel(x, 0, color)
    return img


class TestAlphaBleed:
    def test_red_block_bleeds_into_border(self):
        canvas = Image.new_empty((4, 4))
        canvas.blit(solid((2, 2), RED), (1, 1))

        alpha_bleed(canvas)

        for y in range(4):
            for x in range(4):
                if 1 <= x <= 2 and 1 <= y <= 2:
                    assert canvas.get_pixel(x, y) == RED
                else:
                    assert canvas.get_pixel(x, y) == (255, 0, 0, 0)

    def test_bleed_reaches_beyond_first_ring(self):
        img = _row(GREEN, CLEAR, CLEAR, CLEAR)
        alpha_bleed(img)
        assert [img.get_pixel(x, 0) for x in range(4)] == [GREEN] + [(0, 255, 0, 0)] * 3

    def test_averages_neighbours_with_floor(self):
        img = _row(RED, CLEAR, BLUE)
        alpha_bleed(img)
        assert img.get_pixel(1, 0) == (127, 0, 127, 0)

    def test_later_pixels_average_already_bled_ones(self):
        # (1,0) is processed first and only sees red;
        # (2,0) then sees only bled (1,0) and blue (3,0)
        img = _row(RED, CLEAR, CLEAR, BLUE)
        alpha_bleed(img)
        assert img.get_pixel(1, 0) == (255, 0, 0, 0)
        assert img.get_pixel(2, 0) == (127, 0, 127, 0)

    def test_transparent_rgb_is_overwritten(self):
        img = _row(GREEN, (9, 9, 9, 0))
        alpha_bleed(img)
        assert img.get_pixel(1, 0) == (0, 255, 0, 0)

    def test_partially_transparent_pixels_are_sampled_not_changed(self):
        half = (200, 100, 50, 128)
        img = _row(half, CLEAR)
        alpha_bleed(img)
        assert img.get_pixel(0, 0) == half
        assert img.get_pixel(1, 0) == (200, 100, 50, 0)

    def test_fully_transparent_image_untouched(self):
        img = Image((3, 3), np.full((3, 3, 4), (7, 8, 9, 0), dtype=np.uint8))
        before = img.copy()
        alpha_bleed(img)
        assert img == before

    def test_zero_sized_image_is_a_noop(self):
        img = Image.new_empty((0, 5))
        alpha_bleed(img)
        assert img.size == (0, 5)

    def test_opaque_pixels_never_change(self):
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
        pixels[rng.random((16, 16)) < 0.6, 3] = 0
        img = Image((16, 16), pixels)
        opaque = pixels[:, :, 3] != 0

        alpha_bleed(img)

        assert np.array_equal(img.pixels[opaque], pixels[opaque])
        assert not img.pixels[~opaque, 3].any()

    def test_idempotent(self):
        rng = np.random.default_rng(11)
        pixels = rng.integers(0, 256, size=(24, 20, 4), dtype=np.uint8)
        pixels[rng.random((24, 20)) < 0.8, 3] = 0

        once = Image((20, 24), pixels)
        alpha_bleed(once)
        twice = once.copy()
        alpha_bleed(twice)

        assert twice == once

    def test_single_pixel_fills_a_full_size_sheet(self):
        img = Image.new_empty((1024, 1024))
        img.set_pixel(700, 300, BLUE)

        alpha_bleed(img)

        assert np.array_equal(img.pixels[:, :, :3], np.broadcast_to((0, 0, 255), (1024, 1024, 3)))
        assert img.get_pixel(700, 300) == BLUE
        assert int(img.pixels[:, :, 3].sum()) == 255
