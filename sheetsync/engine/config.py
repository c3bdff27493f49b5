"""Packer configuration: bucket size limits and padding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sheetsync.utils.geometry import Size, grow

if TYPE_CHECKING:
    from sheetsync.config import Settings


@dataclass(frozen=True)
class PackerConfig:
    """Controls how inputs are grouped into spritesheet buckets."""

    # Every bucket starts at this size and doubles until its items fit
    min_size: Size = (128, 128)
    # Hard upper limit per bucket; larger items are rejected
    max_size: Size = (1024, 1024)
    # Extra pixels added to each item's width and height while placing
    padding: int = 0

    def __post_init__(self) -> None:
        for name in ("min_size", "max_size"):
            w, h = getattr(self, name)
            if w <= 0 or h <= 0:
                raise ValueError(f"{name} must be positive on both axes, got {w}x{h}")
        if self.min_size[0] > self.max_size[0] or self.min_size[1] > self.max_size[1]:
            raise ValueError(
                f"min_size {self.min_size[0]}x{self.min_size[1]} exceeds "
                f"max_size {self.max_size[0]}x{self.max_size[1]}"
            )
        if self.padding < 0:
            raise ValueError(f"padding must be non-negative, got {self.padding}")

    def can_pack(self, size: Size) -> bool:
        """True if ``size`` plus padding fits inside ``max_size``."""
        w, h = grow(size, self.padding)
        return w <= self.max_size[0] and h <= self.max_size[1]

    @classmethod
    def from_settings(cls, settings: Settings) -> PackerConfig:
        return cls(
            min_size=tuple(settings.sheetsync_min_size),
            max_size=tuple(settings.sheetsync_max_size),
            padding=settings.sheetsync_padding,
        )
