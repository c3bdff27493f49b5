"""Slice manifest models: what downstream code generation reads back."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class ImageSlice(BaseModel):
    min: tuple[int, int]
    max: tuple[int, int]


class SliceRecord(BaseModel):
    """Where one input asset lives: which sheet, and the rect inside it."""

    asset: str
    # None for inputs too large to pack, which are uploaded on their own
    bucket: int | None = None
    uploaded_id: int | None = None
    offset: tuple[int, int]
    size: tuple[int, int]
    dpi_scale: int = 1

    @property
    def slice(self) -> ImageSlice:
        return ImageSlice(
            min=self.offset,
            max=(self.offset[0] + self.size[0], self.offset[1] + self.size[1]),
        )


class SheetRecord(BaseModel):
    bucket: int
    size: tuple[int, int]
    uploaded_id: int | None = None


class SyncManifest(BaseModel):
    sheets: list[SheetRecord] = Field(default_factory=list)
    inputs: dict[str, SliceRecord] = Field(default_factory=dict)

    def write(self, path: str | Path) -> None:
        Path(path).write_text(self.model_dump_json(indent=2) + "\n", encoding="utf-8")

    @classmethod
    def read(cls, path: str | Path) -> SyncManifest:
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
