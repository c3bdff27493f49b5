"""Asset naming helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePath

_DPI_PATTERN = re.compile(r"^(.+?)@(\d+)x$")


@dataclass(frozen=True, order=True)
class AssetName:
    """Project-relative, forward-slash path that identifies an input, e.g. ``icons/sword.png``."""

    value: str

    @classmethod
    def from_paths(cls, root: str | Path, path: str | Path) -> AssetName:
        """Name ``path`` by its location under ``root``. Symlinks are not followed."""
        relative = Path(path).relative_to(root)
        return cls(relative.as_posix())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DpiAwarePathInfo:
    file_stem: str
    dpi_scale: int = 1


def extract_path_info(path: str | PurePath) -> DpiAwarePathInfo:
    """Split a trailing ``@<N>x`` DPI marker off a file stem.

    ``foo@2x.png`` → (``foo``, 2); ``foo.blah.png`` → (``foo.blah``, 1).
    """
    stem = PurePath(path).stem
    match = _DPI_PATTERN.match(stem)
    if match is None:
        return DpiAwarePathInfo(file_stem=stem, dpi_scale=1)
    return DpiAwarePathInfo(file_stem=match.group(1), dpi_scale=int(match.group(2)))
