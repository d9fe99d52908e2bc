"""Xcode 资源目录 Contents.json 生成。"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from iconsync.core.models import IconSpec

LOGGER = logging.getLogger(__name__)

MANIFEST_FILENAME = "Contents.json"
MANIFEST_INFO = {"version": 1, "author": "xcode"}


def build_manifest(generated: Iterable[IconSpec], order: Sequence[IconSpec] | None = None) -> dict[str, Any]:
    """根据已生成的规格构建 Contents.json 内容。

    提供 order 时按规格表顺序输出，与实际生成顺序无关。
    """

    generated_specs = list(generated)
    if order is not None:
        wanted = set(generated_specs)
        generated_specs = [spec for spec in order if spec in wanted]

    return {
        "images": [spec.to_manifest_entry() for spec in generated_specs],
        "info": dict(MANIFEST_INFO),
    }


def render_manifest(manifest: dict[str, Any]) -> str:
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def write_manifest(
    dest_dir: Path,
    generated: Iterable[IconSpec],
    order: Sequence[IconSpec] | None = None,
) -> Path:
    """写入 Contents.json，整体覆盖旧文件。"""

    manifest_path = dest_dir / MANIFEST_FILENAME
    content = render_manifest(build_manifest(generated, order))
    manifest_path.write_text(content, encoding="utf-8")
    LOGGER.info("已生成 %s", manifest_path.name)
    return manifest_path
