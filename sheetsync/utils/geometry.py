"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from dataclasses import dataclass

Size = tuple[int, int]
Point = tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in pixel space.

    Extents are half-open: a rect at (0, 0) with size (4, 4) covers columns
    and rows 0..3, and ``max`` is (4, 4).
    """

    position: Point = (0, 0)
    size: Size = (0, 0)

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def max(self) -> Point:
        return (self.position[0] + self.size[0], self.position[1] + self.size[1])

    @property
    def area(self) -> int:
        return self.size[0] * self.size[1]

    @property
    def is_empty(self) -> bool:
        return self.size[0] == 0 or self.size[1] == 0

    def intersects(self, other: Rect) -> bool:
        """True if the interiors overlap. Rects sharing only an edge do not intersect.

        Empty rects cover no pixels and never intersect anything.
        """
        if self.is_empty or other.is_empty:
            return False
        ax1, ay1 = self.max
        bx1, by1 = other.max
        x_overlap = self.x < bx1 and other.x < ax1
        y_overlap = self.y < by1 and other.y < ay1
        return x_overlap and y_overlap

    def fits_within(self, size: Size) -> bool:
        """True if the rect lies inside a ``size`` canvas anchored at the origin."""
        max_x, max_y = self.max
        return self.x >= 0 and self.y >= 0 and max_x <= size[0] and max_y <= size[1]

    def shrink(self, amount: int) -> Rect:
        """Same position, size reduced by ``amount`` on both axes."""
        return Rect(self.position, (self.size[0] - amount, self.size[1] - amount))


def grow(size: Size, amount: int) -> Size:
    return (size[0] + amount, size[1] + amount)


def double_clamped(size: Size, limit: Size) -> Size:
    """Double each axis of ``size``, clamped per axis to ``limit``."""
    return (min(size[0] * 2, limit[0]), min(size[1] * 2, limit[1]))


def parse_size(text: str) -> Size:
    """Parse ``"WxH"`` (or a single ``"N"`` for square) into a size tuple."""
    parts = text.lower().replace(" ", "").split("x")
    if len(parts) == 1:
        parts = parts * 2
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid size {text!r}, expected WIDTHxHEIGHT")
    return (int(parts[0]), int(parts[1]))
