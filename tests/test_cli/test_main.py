"""Tests for the command-line entry point."""

from __future__ import annotations

from sheetsync.main import build_parser, main
from sheetsync.models.manifest import SyncManifest
from tests.conftest import RED, solid, write_png


def test_pack_writes_sheets_and_manifest(asset_root, tmp_path, capsys):
    out = tmp_path / "out"

    code = main(["pack", str(asset_root), "-o", str(out), "--min-size", "16x16"])

    assert code == 0
    assert (out / "1").exists()
    manifest = SyncManifest.read(out / "sheetsync-manifest.json")
    assert set(manifest.inputs) == {"icons/a.png", "b@2x.png"}
    assert "Packed 2 images into 1 sheets" in capsys.readouterr().out


def test_pack_defaults_to_debug_folder_inside_root(asset_root):
    assert main(["pack", str(asset_root), "--min-size", "16"]) == 0
    assert (asset_root / ".sheetsync-debug" / "1").exists()

    # A second run must not pick up its own output
    assert main(["pack", str(asset_root), "--min-size", "16"]) == 0
    manifest = SyncManifest.read(asset_root / ".sheetsync-debug" / "sheetsync-manifest.json")
    assert len(manifest.inputs) == 2


def test_pack_with_none_target(asset_root, tmp_path):
    out = tmp_path / "out"
    assert main(["pack", str(asset_root), "-o", str(out), "--target", "none"]) == 0

    manifest = SyncManifest.read(out / "sheetsync-manifest.json")
    assert all(s.uploaded_id is None for s in manifest.sheets)
    assert not (out / "1").exists()


def test_inspect(asset_root, capsys):
    assert main(["inspect", str(asset_root), "--min-size", "16x16", "--padding", "1"]) == 0
    assert "bucket 0: 16x16, 2 items" in capsys.readouterr().out


def test_oversized_input_is_listed_as_unpacked(tmp_path, capsys):
    write_png(tmp_path / "big.png", solid((40, 40), RED))
    write_png(tmp_path / "small.png", solid((4, 4), RED))

    assert main(["inspect", str(tmp_path), "--min-size", "16x16", "--max-size", "32x32"]) == 0

    out = capsys.readouterr().out
    assert "bucket 0: 16x16, 1 items" in out
    assert "unpacked: big.png 40x40" in out


def test_pack_uploads_oversized_input(tmp_path, capsys):
    write_png(tmp_path / "big.png", solid((40, 40), RED))
    out = tmp_path / "out"

    assert main(["pack", str(tmp_path), "-o", str(out), "--max-size", "32x32", "--min-size", "16"]) == 0

    assert "Packed 0 images into 0 sheets, 1 too large to pack" in capsys.readouterr().out
    assert SyncManifest.read(out / "sheetsync-manifest.json").inputs["big.png"].uploaded_id == 1


def test_invalid_sizes_fail(tmp_path):
    assert main(["inspect", str(tmp_path), "--min-size", "64x64", "--max-size", "32x32"]) == 1


def test_missing_root(tmp_path):
    assert main(["inspect", str(tmp_path / "nope")]) == 1


def test_parser_sizes():
    args = build_parser().parse_args(["pack", "root", "--max-size", "512x256"])
    assert args.max_size == (512, 256)
    assert args.target == "debug"
