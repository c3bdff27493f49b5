"""Rectangle packer: groups sized items into spritesheet buckets.

Placement is a first-fit anchor (shelf) heuristic:

1. Every item is inflated by ``padding`` on both axes.
2. Items are sorted by area, largest first. Ties keep input order.
3. A bucket starts at ``min_size``. If some items do not fit, the bucket is
   doubled per axis (clamped to ``max_size``) and the same items are packed
   again. At ``max_size`` the bucket is emitted with whatever fit and the
   leftovers start a new bucket at ``min_size``.
4. Within one pass, candidate top-left corners ("anchors") start as
   ``[(0, 0)]``. An item takes the first anchor where it overlaps no placed
   item and stays inside the bucket. That anchor is consumed, and the points
   right of and below the new rect become anchors if they lie inside the
   bucket.

Items whose padded size exceeds ``max_size`` are rejected before packing,
otherwise step 3 would never drain them. Items with zero area take ``(0, 0)``
of the current bucket and leave the anchors alone.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sheetsync.engine.config import PackerConfig
from sheetsync.engine.ids import IdGenerator, ItemId
from sheetsync.utils.geometry import Point, Rect, Size, double_clamped, grow

logger = logging.getLogger(__name__)


class PackError(ValueError):
    """An item can never be placed within the configured ``max_size``."""

    def __init__(self, item_id: ItemId, size: Size, max_size: Size) -> None:
        self.item_id = item_id
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Item {item_id} is {size[0]}x{size[1]} including padding, "
            f"which does not fit in the maximum bucket size {max_size[0]}x{max_size[1]}"
        )


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InputItem:
    """A size to be packed plus the identifier the packer assigned to it.

    Build these with ``SimplePacker.item`` or ``InputItem.create`` so ids
    always come from an ``IdGenerator``.
    """

    id: ItemId
    size: Size

    @classmethod
    def create(cls, size: Size, ids: IdGenerator) -> InputItem:
        w, h = int(size[0]), int(size[1])
        if w < 0 or h < 0:
            raise ValueError(f"Item size must be non-negative, got {w}x{h}")
        return cls(id=ids.next_id(), size=(w, h))

    @property
    def area(self) -> int:
        return self.size[0] * self.size[1]


@dataclass(frozen=True)
class OutputItem:
    """Where an ``InputItem`` with the same id ended up inside its bucket."""

    id: ItemId
    rect: Rect

    @property
    def position(self) -> Point:
        return self.rect.position

    @property
    def size(self) -> Size:
        return self.rect.size

    @property
    def min(self) -> Point:
        return self.rect.position

    @property
    def max(self) -> Point:
        return self.rect.max


@dataclass(frozen=True)
class Bucket:
    """One atlas: its pixel size and the items placed in it."""

    size: Size
    items: tuple[OutputItem, ...] = ()


@dataclass(frozen=True)
class PackOutput:
    """Buckets in creation order."""

    buckets: tuple[Bucket, ...] = ()

    def find(self, item_id: ItemId) -> tuple[int, OutputItem] | None:
        """Bucket index and placement of ``item_id``, or None."""
        for index, bucket in enumerate(self.buckets):
            for item in bucket.items:
                if item.id == item_id:
                    return index, item
        return None

    @property
    def item_count(self) -> int:
        return sum(len(b.items) for b in self.buckets)


@dataclass
class _Pass:
    """Result of packing one item list into one fixed-size bucket."""

    size: Size
    placed: list[OutputItem] = field(default_factory=list)
    unplaced: list[InputItem] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Packer
# ---------------------------------------------------------------------------

class SimplePacker:
    """First-fit anchor packer with bucket growth from ``min_size`` to ``max_size``."""

    def __init__(self, config: PackerConfig | None = None, ids: IdGenerator | None = None) -> None:
        self.config = config or PackerConfig()
        self.ids = ids or IdGenerator()

    def item(self, size: Size) -> InputItem:
        """Create an ``InputItem`` with an id from this packer's generator."""
        return InputItem.create(size, self.ids)

    def pack(self, items: Iterable[InputItem]) -> PackOutput:
        padding = self.config.padding
        max_size = self.config.max_size

        padded: list[InputItem] = []
        for item in items:
            size = grow(item.size, padding)
            if not self.config.can_pack(item.size):
                raise PackError(item.id, size, max_size)
            padded.append(InputItem(id=item.id, size=size))

        # sorted() is stable, so equal areas keep their input order
        remaining = sorted(padded, key=lambda i: i.area, reverse=True)
        num_items = len(remaining)
        logger.debug("Packing %d items", num_items)

        buckets: list[Bucket] = []
        while remaining:
            current_size = self.config.min_size

            while True:
                result = pack_one_bucket(remaining, current_size)

                if not result.unplaced:
                    break

                if current_size[0] < max_size[0] or current_size[1] < max_size[1]:
                    current_size = double_clamped(current_size, max_size)
                    continue

                # Already at max_size: this is as few buckets as we will get
                break

            if not result.placed:
                # An empty bucket here would never drain ``remaining``
                raise PackError(result.unplaced[0].id, result.unplaced[0].size, max_size)

            buckets.append(
                Bucket(
                    size=result.size,
                    items=tuple(OutputItem(o.id, o.rect.shrink(padding)) for o in result.placed),
                )
            )
            remaining = result.unplaced

        logger.debug("Finished packing %d items into %d buckets", num_items, len(buckets))
        return PackOutput(buckets=tuple(buckets))


def pack_one_bucket(items: list[InputItem], size: Size) -> _Pass:
    """Single first-fit pass of ``items`` (already sorted and padded) into ``size``."""
    logger.debug(
        "Trying to pack %d remaining items into bucket of size %dx%d",
        len(items),
        size[0],
        size[1],
    )

    result = _Pass(size=size)
    anchors: list[Point] = [(0, 0)]

    for item in items:
        if item.area == 0:
            # Empty items cover no pixels; they sit at the origin and leave anchors alone
            empty = Rect((0, 0), item.size)
            if empty.fits_within(size):
                result.placed.append(OutputItem(item.id, empty))
            else:
                result.unplaced.append(item)
            continue

        fit_index = _first_fit(anchors, item.size, result.placed, size)

        if fit_index is None:
            logger.debug("Item %s (%dx%d) did not fit", item.id, item.size[0], item.size[1])
            result.unplaced.append(item)
            continue

        anchor = anchors.pop(fit_index)
        rect = Rect(anchor, item.size)
        logger.debug("Item %s fit at anchor %s", item.id, anchor)

        right = (rect.max[0], anchor[1])
        if right[0] < size[0] and right[1] < size[1]:
            anchors.append(right)

        below = (anchor[0], rect.max[1])
        if below[0] < size[0] and below[1] < size[1]:
            anchors.append(below)

        result.placed.append(OutputItem(item.id, rect))

    return result


def _first_fit(
    anchors: list[Point],
    size: Size,
    placed: list[OutputItem],
    bucket_size: Size,
) -> int | None:
    for index, anchor in enumerate(anchors):
        candidate = Rect(anchor, size)
        if not candidate.fits_within(bucket_size):
            continue
        if any(candidate.intersects(p.rect) for p in placed):
            continue
        return index
    return None


def pack(items: Iterable[InputItem], config: PackerConfig | None = None) -> PackOutput:
    """Pack ``items`` with a throwaway ``SimplePacker``."""
    return SimplePacker(config=config).pack(items)
