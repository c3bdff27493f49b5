"""Sync session: discover images, build spritesheets, upload them, write the manifest."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sheetsync.engine.config import PackerConfig
from sheetsync.engine.context import SpritesheetContext
from sheetsync.engine.image import Image
from sheetsync.engine.pipeline import SpritesheetPipeline
from sheetsync.models.manifest import SheetRecord, SliceRecord, SyncManifest
from sheetsync.sync.backend import SheetSyncError, SyncBackend, UploadInfo
from sheetsync.utils.asset_name import AssetName, extract_path_info
from sheetsync.utils.png import encode_png, read_png

logger = logging.getLogger(__name__)

_IMAGE_SUFFIXES = {".png"}


class OverlappingInputsError(SheetSyncError):
    def __init__(self, name: AssetName, first: Path, second: Path) -> None:
        self.name = name
        super().__init__(f"Asset {name} is provided by both {first} and {second}")


@dataclass
class SyncInput:
    path: Path
    name: AssetName
    dpi_scale: int = 1


class SyncSession:
    """Holds the state for a single sync run rooted at ``root``.

    Inputs that fit within the packer's ``max_size`` are packed into
    spritesheets. Larger ones are uploaded as they are, one upload each.
    """

    def __init__(
        self,
        root: str | Path,
        backend: SyncBackend,
        config: PackerConfig | None = None,
        exclude: list[str | Path] | None = None,
    ) -> None:
        self.root = Path(root)
        self.backend = backend
        self.pipeline = SpritesheetPipeline(config=config)
        self.exclude = [Path(p).absolute() for p in (exclude or [])]

        self.inputs: dict[AssetName, SyncInput] = {}
        self.context: SpritesheetContext[AssetName] | None = None
        self.sheet_ids: list[int | None] = []
        # Inputs too large to pack, with their upload ids once uploaded
        self.unpacked: dict[AssetName, Image] = {}
        self.unpacked_ids: dict[AssetName, int | None] = {}

    def discover_inputs(self) -> dict[AssetName, SyncInput]:
        """Find every PNG under ``root``, in sorted path order."""
        self.inputs = {}
        # Names that differ only by case would collide on case-insensitive hosts
        seen: dict[str, Path] = {}

        for path in sorted(p for p in self.root.rglob("*") if p.is_file()):
            if self._is_excluded(path):
                continue
            if path.suffix.lower() not in _IMAGE_SUFFIXES:
                logger.warning("Skipping non-image file %s", path)
                continue

            name = AssetName.from_paths(self.root, path)
            key = name.value.casefold()
            existing = seen.get(key)
            if existing is not None:
                raise OverlappingInputsError(name, existing, path)
            seen[key] = path

            self.inputs[name] = SyncInput(
                path=path,
                name=name,
                dpi_scale=extract_path_info(path).dpi_scale,
            )

        logger.info("Discovered %d inputs under %s", len(self.inputs), self.root)
        return self.inputs

    def build(self) -> SpritesheetContext[AssetName]:
        config = self.pipeline.config
        packable: dict[AssetName, Image] = {}
        self.unpacked = {}

        for name, sync_input in self.inputs.items():
            image = read_png(sync_input.path)
            if config.can_pack(image.size):
                packable[name] = image
            else:
                logger.warning(
                    "%s is %dx%d, larger than %dx%d with padding; uploading it unpacked",
                    name,
                    image.width,
                    image.height,
                    config.max_size[0],
                    config.max_size[1],
                )
                self.unpacked[name] = image

        self.context = self.pipeline.run(packable)
        self.sheet_ids = [None] * self.context.num_sheets
        self.unpacked_ids = {name: None for name in self.unpacked}
        return self.context

    def upload(self) -> list[int | None]:
        """Upload every sheet, then every unpacked input. Returns the sheet ids."""
        ctx = self._require_context()
        for index, sheet in enumerate(ctx.sheets):
            info = UploadInfo(name=f"spritesheet-{index}", contents=encode_png(sheet))
            response = self.backend.upload(info)
            logger.info("Uploaded %s as %d", info.name, response.id)
            self.sheet_ids[index] = response.id

        for name in self.unpacked:
            info = UploadInfo(name=str(name), contents=self.inputs[name].path.read_bytes())
            response = self.backend.upload(info)
            logger.info("Uploaded unpacked %s as %d", info.name, response.id)
            self.unpacked_ids[name] = response.id

        return self.sheet_ids

    def manifest(self) -> SyncManifest:
        ctx = self._require_context()
        manifest = SyncManifest()

        for index, sheet in enumerate(ctx.sheets):
            manifest.sheets.append(
                SheetRecord(bucket=index, size=sheet.size, uploaded_id=self.sheet_ids[index])
            )

        for name, placement in ctx.placements.items():
            manifest.inputs[str(name)] = SliceRecord(
                asset=str(name),
                bucket=placement.bucket,
                uploaded_id=self.sheet_ids[placement.bucket],
                offset=placement.rect.position,
                size=placement.rect.size,
                dpi_scale=self.inputs[name].dpi_scale,
            )

        for name, image in self.unpacked.items():
            manifest.inputs[str(name)] = SliceRecord(
                asset=str(name),
                bucket=None,
                uploaded_id=self.unpacked_ids[name],
                offset=(0, 0),
                size=image.size,
                dpi_scale=self.inputs[name].dpi_scale,
            )
        return manifest

    def write_manifest(self, path: str | Path) -> SyncManifest:
        manifest = self.manifest()
        manifest.write(path)
        logger.info("Wrote manifest for %d inputs to %s", len(manifest.inputs), path)
        return manifest

    def run(self, manifest_path: str | Path | None = None, upload: bool = True) -> SyncManifest:
        self.discover_inputs()
        self.build()
        if upload:
            self.upload()
        if manifest_path is not None:
            return self.write_manifest(manifest_path)
        return self.manifest()

    def _is_excluded(self, path: Path) -> bool:
        absolute = path.absolute()
        return any(absolute == ex or ex in absolute.parents for ex in self.exclude)

    def _require_context(self) -> SpritesheetContext[AssetName]:
        if self.context is None:
            raise SheetSyncError("No spritesheets built yet; call build() first")
        return self.context
