"""SpritesheetContext: the state object flowing through the spritesheet pipeline.

Per-input results → SpritesheetContext.placements (keyed by the caller's key)
Per-bucket results → SpritesheetContext.sheets (indexed like pack_output.buckets)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

from sheetsync.engine.image import Image
from sheetsync.engine.packer import InputItem, PackOutput
from sheetsync.utils.geometry import Rect

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class Placement:
    """Which sheet an input landed in and the slice to cut it back out."""

    bucket: int
    rect: Rect


@dataclass
class SpritesheetContext(Generic[K]):
    """Shared state for one pipeline run."""

    # Decoded source images, keyed by caller identifier (usually an asset name)
    sources: dict[K, Image] = field(default_factory=dict)
    # Packer inputs created for each source
    inputs: dict[K, InputItem] = field(default_factory=dict)
    # Raw packer result, geometry only
    pack_output: PackOutput | None = None
    # One composited (and bled) image per bucket
    sheets: list[Image] = field(default_factory=list)
    # Source key → (bucket index, rect)
    placements: dict[K, Placement] = field(default_factory=dict)
    # Stage name → elapsed milliseconds
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def num_sheets(self) -> int:
        return len(self.sheets)

    def items_in(self, bucket: int) -> list[K]:
        """Source keys placed in ``bucket``, in placement order."""
        return [key for key, p in self.placements.items() if p.bucket == bucket]
