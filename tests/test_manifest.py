"""测试 Contents.json 的生成。"""

from __future__ import annotations

import json
from pathlib import Path

from iconsync.core.icon_specs import IOS_ICON_SPECS
from iconsync.core.manifest import MANIFEST_FILENAME, build_manifest, write_manifest


def test_manifest_entries_follow_table_order() -> None:
    generated = [IOS_ICON_SPECS[4], IOS_ICON_SPECS[0], IOS_ICON_SPECS[8]]

    manifest = build_manifest(generated, order=IOS_ICON_SPECS)

    assert [entry["filename"] for entry in manifest["images"]] == [
        "Icon-App-20x20@2x.png",
        "Icon-App-40x40@2x.png",
        "Icon-App-1024x1024@1x.png",
    ]
    assert manifest["images"][2] == {
        "size": "1024x1024",
        "idiom": "ios-marketing",
        "filename": "Icon-App-1024x1024@1x.png",
        "scale": "1x",
    }
    assert manifest["info"] == {"version": 1, "author": "xcode"}


def test_empty_manifest_still_has_info_block() -> None:
    manifest = build_manifest([], order=IOS_ICON_SPECS)

    assert manifest == {"images": [], "info": {"version": 1, "author": "xcode"}}


def test_write_manifest_overwrites_existing_file(tmp_path: Path) -> None:
    (tmp_path / MANIFEST_FILENAME).write_text("stale content that is much longer than the new one" * 100)

    path = write_manifest(tmp_path, IOS_ICON_SPECS[:2], order=IOS_ICON_SPECS)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [entry["scale"] for entry in data["images"]] == ["2x", "3x"]
    assert path.read_text(encoding="utf-8").endswith("}\n")


def test_manifest_text_is_deterministic(tmp_path: Path) -> None:
    first = write_manifest(tmp_path, reversed(IOS_ICON_SPECS), order=IOS_ICON_SPECS).read_bytes()
    second = write_manifest(tmp_path, IOS_ICON_SPECS, order=IOS_ICON_SPECS).read_bytes()

    assert first == second
