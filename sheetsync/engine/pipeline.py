"""Spritesheet pipeline orchestrator: pack, composite, bleed."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Hashable, TypeVar

from sheetsync.engine.alpha_bleed import alpha_bleed
from sheetsync.engine.config import PackerConfig
from sheetsync.engine.context import Placement, SpritesheetContext
from sheetsync.engine.ids import IdGenerator
from sheetsync.engine.image import Image
from sheetsync.engine.packer import SimplePacker

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


class SpritesheetPipeline:
    """Turns a batch of decoded images into bled spritesheets plus slice placements."""

    def __init__(
        self,
        config: PackerConfig | None = None,
        ids: IdGenerator | None = None,
        bleed: bool = True,
    ) -> None:
        self.config = config or PackerConfig()
        self.packer = SimplePacker(config=self.config, ids=ids)
        self.bleed = bleed

    def run(self, images: Mapping[K, Image]) -> SpritesheetContext[K]:
        """Run every stage on ``images``. Iteration order of ``images`` breaks packing ties."""
        start = time.perf_counter()
        ctx: SpritesheetContext[K] = SpritesheetContext(sources=dict(images))

        stages: list[tuple[str, Callable[[SpritesheetContext[K]], None]]] = [
            ("pack", self._pack),
            ("composite", self._composite),
        ]
        if self.bleed:
            stages.append(("bleed", self._bleed))

        for name, stage in stages:
            t0 = time.perf_counter()
            stage(ctx)
            ctx.timings[name] = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", name, ctx.timings[name])

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Spritesheet pipeline: %d images into %d sheets in %.0fms",
            len(ctx.sources),
            ctx.num_sheets,
            total,
        )
        return ctx

    def _pack(self, ctx: SpritesheetContext[K]) -> None:
        ctx.inputs = {key: self.packer.item(image.size) for key, image in ctx.sources.items()}
        ctx.pack_output = self.packer.pack(ctx.inputs.values())

        keys_by_id = {item.id: key for key, item in ctx.inputs.items()}
        for index, bucket in enumerate(ctx.pack_output.buckets):
            for out in bucket.items:
                ctx.placements[keys_by_id[out.id]] = Placement(bucket=index, rect=out.rect)

    def _composite(self, ctx: SpritesheetContext[K]) -> None:
        if ctx.pack_output is None:
            raise RuntimeError("composite stage needs the pack stage's output")
        ctx.sheets = [Image.new_empty(bucket.size) for bucket in ctx.pack_output.buckets]
        for key, placement in ctx.placements.items():
            ctx.sheets[placement.bucket].blit(ctx.sources[key], placement.rect.position)

    def _bleed(self, ctx: SpritesheetContext[K]) -> None:
        for sheet in ctx.sheets:
            alpha_bleed(sheet)


def create_pipeline(config: PackerConfig | None = None, bleed: bool = True) -> SpritesheetPipeline:
    """Factory function for creating a pipeline instance."""
    return SpritesheetPipeline(config=config, bleed=bleed)
