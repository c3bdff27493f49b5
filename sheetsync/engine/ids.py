"""Identifier allocation for packer inputs."""

from __future__ import annotations

import itertools
from typing import NewType

ItemId = NewType("ItemId", int)


class IdGenerator:
    """Hands out monotonically increasing item identifiers, starting at ``start``.

    Ids are never reused by a generator. Each packer owns one unless the
    caller passes its own, so two generators built with the same ``start``
    replay the same sequence.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"Identifier sequence must start at 1 or above, got {start}")
        self._counter = itertools.count(start)
        self._last: int | None = None

    def next_id(self) -> ItemId:
        self._last = next(self._counter)
        return ItemId(self._last)

    @property
    def last(self) -> ItemId | None:
        return None if self._last is None else ItemId(self._last)

    def __iter__(self):
        return self

    def __next__(self) -> ItemId:
        return self.next_id()
