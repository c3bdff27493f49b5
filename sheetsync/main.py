"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from sheetsync.config import settings
from sheetsync.engine.config import PackerConfig
from sheetsync.sync.backend import DebugSyncBackend, NoneSyncBackend, SheetSyncError, SyncBackend
from sheetsync.sync.session import SyncSession
from sheetsync.utils.geometry import parse_size

logger = logging.getLogger("sheetsync")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.sheetsync_log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _packer_config(args: argparse.Namespace) -> PackerConfig:
    base = PackerConfig.from_settings(settings)
    return PackerConfig(
        min_size=args.min_size or base.min_size,
        max_size=args.max_size or base.max_size,
        padding=base.padding if args.padding is None else args.padding,
    )


def _add_packing_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", help="Folder to search for PNG inputs")
    parser.add_argument("--min-size", type=parse_size, help="Starting spritesheet size, e.g. 128x128")
    parser.add_argument("--max-size", type=parse_size, help="Largest spritesheet size, e.g. 1024x1024")
    parser.add_argument("--padding", type=int, help="Pixels of padding between packed images")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sheetsync", description="Pack images into spritesheets and sync them")
    sub = parser.add_subparsers(dest="command", required=True)

    pack = sub.add_parser("pack", help="Pack, upload and write a slice manifest")
    _add_packing_args(pack)
    pack.add_argument("-o", "--output", help="Folder for sheets and the manifest")
    pack.add_argument(
        "--target",
        choices=["debug", "none"],
        default="debug",
        help="Where sheets go: 'debug' copies them to the output folder, 'none' skips uploading",
    )

    inspect = sub.add_parser("inspect", help="Show how inputs would be packed")
    _add_packing_args(inspect)

    return parser


def _run_pack(args: argparse.Namespace) -> int:
    root = Path(args.root)
    out_dir = Path(args.output) if args.output else root / settings.sheetsync_debug_folder

    backend: SyncBackend = DebugSyncBackend(out_dir) if args.target == "debug" else NoneSyncBackend()
    session = SyncSession(root, backend, config=_packer_config(args), exclude=[out_dir])

    out_dir.mkdir(parents=True, exist_ok=True)
    manifest = session.run(
        manifest_path=out_dir / settings.sheetsync_manifest_name,
        upload=args.target != "none",
    )

    packed = sum(1 for record in manifest.inputs.values() if record.bucket is not None)
    summary = f"Packed {packed} images into {len(manifest.sheets)} sheets"
    unpacked = len(manifest.inputs) - packed
    if unpacked:
        summary += f", {unpacked} too large to pack"
    print(f"{summary} → {out_dir}")
    return 0


def _run_inspect(args: argparse.Namespace) -> int:
    session = SyncSession(args.root, NoneSyncBackend(), config=_packer_config(args))
    session.discover_inputs()
    ctx = session.build()

    for index, sheet in enumerate(ctx.sheets):
        print(f"bucket {index}: {sheet.width}x{sheet.height}, {len(ctx.items_in(index))} items")
    for name, image in session.unpacked.items():
        print(f"unpacked: {name} {image.width}x{image.height}")
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if not Path(args.root).is_dir():
        print(f"Folder not found: {args.root}")
        return 1

    handlers = {"pack": _run_pack, "inspect": _run_inspect}
    try:
        return handlers[args.command](args)
    except (SheetSyncError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
