"""Spritesheet build engine: packing, compositing and alpha bleeding."""

from sheetsync.engine.alpha_bleed import alpha_bleed
from sheetsync.engine.config import PackerConfig
from sheetsync.engine.context import Placement, SpritesheetContext
from sheetsync.engine.ids import IdGenerator
from sheetsync.engine.image import BlitError, Image
from sheetsync.engine.packer import (
    Bucket,
    InputItem,
    OutputItem,
    PackError,
    PackOutput,
    SimplePacker,
    pack,
)
from sheetsync.engine.pipeline import SpritesheetPipeline, create_pipeline

__all__ = [
    "alpha_bleed",
    "PackerConfig",
    "Placement",
    "SpritesheetContext",
    "IdGenerator",
    "BlitError",
    "Image",
    "Bucket",
    "InputItem",
    "OutputItem",
    "PackError",
    "PackOutput",
    "SimplePacker",
    "pack",
    "SpritesheetPipeline",
    "create_pipeline",
]
