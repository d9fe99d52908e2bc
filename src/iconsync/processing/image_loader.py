"""源图标加载实现。"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from iconsync.core.exceptions import ImageLoadingError

LOGGER = logging.getLogger(__name__)


def load_image(path: Path) -> Image.Image:
    """加载单张图片并统一为 RGBA 模式，保留透明通道。

    返回值为新的 Image 对象，调用者负责关闭。
    """

    try:
        with Image.open(path) as img:
            img.load()
            if img.mode != "RGBA":
                return img.convert("RGBA")
            return img.copy()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", path, exc)
        raise ImageLoadingError(f"无法加载图像: {path}") from exc
