"""Upload backends.

A backend is anything with ``upload(info) -> UploadResponse``. The session
calls it once per finished spritesheet and once per input too large to
pack. Retrying belongs in a wrapper backend, not here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SheetSyncError(Exception):
    """Base class for sync failures."""


class NoneBackendError(SheetSyncError):
    def __init__(self) -> None:
        super().__init__("Cannot upload assets with the 'none' target.")


class UploadError(SheetSyncError):
    """The backend could not store an upload."""


@dataclass(frozen=True)
class UploadInfo:
    name: str
    contents: bytes


@dataclass(frozen=True)
class UploadResponse:
    id: int


class SyncBackend(Protocol):
    def upload(self, info: UploadInfo) -> UploadResponse: ...


class NoneSyncBackend:
    """Refuses every upload. Used when a run should only pack."""

    def upload(self, info: UploadInfo) -> UploadResponse:
        raise NoneBackendError()


class DebugSyncBackend:
    """Writes each upload to ``<folder>/<id>`` with ids counting up from 1."""

    def __init__(self, folder: str | Path) -> None:
        self.folder = Path(folder)
        self.last_id = 0

    def upload(self, info: UploadInfo) -> UploadResponse:
        logger.info("Copying %s to local folder %s", info.name, self.folder)

        self.last_id += 1
        asset_id = self.last_id

        try:
            self.folder.mkdir(parents=True, exist_ok=True)
            (self.folder / str(asset_id)).write_bytes(info.contents)
        except OSError as e:
            raise UploadError(f"Could not write {info.name} to {self.folder}: {e}") from e

        return UploadResponse(id=asset_id)
