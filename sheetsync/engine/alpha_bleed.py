"""Alpha bleeding: spread edge colors into fully transparent pixels.

Renderers that filter or resize a spritesheet sample transparent texels next
to visible ones. If those texels are transparent *black*, edges pick up a dark
fringe. Bleeding rewrites the RGB of transparent pixels near visible ones to an
average of their neighbours, ring by ring outward, and keeps their alpha at 0.

Pixels with no 8-connected path to a visible pixel are left untouched.
"""

from __future__ import annotations

from collections import deque

import numpy as np
from numpy.typing import NDArray

from sheetsync.engine.image import Image

# 8-neighbourhood: E, SE, S, SW, W, NW, N, NE
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)


def alpha_bleed(image: Image) -> None:
    """Bleed ``image`` in place."""
    w, h = image.size
    if w == 0 or h == 0:
        return

    pixels = image.pixels
    opaque = pixels[:, :, 3] != 0
    frontier = _borders_opaque(opaque) & ~opaque

    # argwhere walks row-major, so the first ring is queued top-to-bottom, left-to-right
    to_visit: deque[tuple[int, int]] = deque(
        (int(x), int(y)) for y, x in np.argwhere(frontier)
    )
    if not to_visit:
        return

    # The walk runs on plain lists; indexing numpy scalars per pixel is far slower.
    # Safe to read colour from: visible pixels now, bled pixels once processed
    can_sample: list[list[bool]] = opaque.tolist()
    # Already queued (or never needs queueing)
    visited: list[list[bool]] = (opaque | frontier).tolist()
    rgb: list[list[list[int]]] = pixels[:, :, :3].tolist()

    while to_visit:
        x, y = to_visit.popleft()

        total_r = total_g = total_b = 0
        contributing = 0

        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if nx < 0 or ny < 0 or nx >= w or ny >= h:
                continue
            if can_sample[ny][nx]:
                r, g, b = rgb[ny][nx]
                total_r += r
                total_g += g
                total_b += b
                contributing += 1
            elif not visited[ny][nx]:
                visited[ny][nx] = True
                to_visit.append((nx, ny))

        # Every queued pixel has a sampleable neighbour: first-ring pixels touch
        # a visible pixel, later ones touch the pixel that queued them.
        rgb[y][x] = [total_r // contributing, total_g // contributing, total_b // contributing]
        can_sample[y][x] = True

    bled = np.array(can_sample, dtype=bool) & ~opaque
    pixels[bled, :3] = np.array(rgb, dtype=np.uint8)[bled]
    pixels[bled, 3] = 0


def _borders_opaque(opaque: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Mask of pixels with at least one visible pixel among their 8 neighbours."""
    h, w = opaque.shape
    padded = np.pad(opaque, 1, mode="constant", constant_values=False)
    result = np.zeros_like(opaque)
    for dx, dy in DIRECTIONS:
        result |= padded[1 + dy : 1 + dy + h, 1 + dx : 1 + dx + w]
    return result
