"""输出目录管理与图标写入模块。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from PIL import Image

from iconsync.core.exceptions import ImageWriteError
from iconsync.core.models import IconSpec

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = {
    ".png": "PNG",
}


class OutputManager:
    """负责处理 AppIcon 输出目录、图标写入与过期文件清理。"""

    def __init__(self, dest_root: Path) -> None:
        self.output_dir = dest_root.resolve()

    def ensure_output_dir(self) -> Path:
        """输出目录不存在时创建（含父目录）。"""

        if not self.output_dir.exists():
            LOGGER.info("输出目录不存在，正在创建：%s", self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def destination_for(self, spec: IconSpec) -> Path:
        return self.output_dir / spec.filename

    def prune_stale(self, specs: Iterable[IconSpec], keep: Iterable[IconSpec]) -> list[Path]:
        """删除规格表中本次未生成的旧图标，其余文件不受影响。"""

        kept_names = {spec.filename for spec in keep}
        removed: list[Path] = []
        for spec in specs:
            if spec.filename in kept_names:
                continue
            candidate = self.destination_for(spec)
            if not candidate.is_file():
                continue
            try:
                candidate.unlink()
            except OSError as exc:
                LOGGER.warning("无法删除过期图标 %s: %s", candidate.name, exc)
                continue
            LOGGER.info("已删除过期图标 %s", candidate.name)
            removed.append(candidate)
        return removed


def save_image_file(image: Image.Image, destination: Path) -> None:
    """将 PIL Image 保存到磁盘，保留 Alpha 通道。"""

    suffix = destination.suffix.lower()
    image_format = SUPPORTED_FORMATS.get(suffix)
    if not image_format:
        raise ImageWriteError(f"不支持的输出格式: {suffix}")

    image_to_save = image
    if image.mode not in {"RGB", "RGBA"}:
        image_to_save = image.convert("RGBA")

    try:
        image_to_save.save(destination, format=image_format, optimize=True)
    except OSError as exc:
        raise ImageWriteError(f"写入文件失败: {destination}") from exc
