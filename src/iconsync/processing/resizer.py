"""图标缩放。"""

from __future__ import annotations

from PIL import Image

from iconsync.core.exceptions import IconResizeError, UpscaleNotAllowedError

# Pillow 的 BICUBIC 在缩小时会按比例扩大采样核，自带抗锯齿。
RESAMPLE_FILTER = Image.BICUBIC


def resize_icon(image: Image.Image, pixel_size: int) -> Image.Image:
    """生成 pixel_size x pixel_size 的 RGBA 图标。

    不允许放大：pixel_size 大于源图宽度时抛出 UpscaleNotAllowedError。
    """

    if pixel_size <= 0:
        raise IconResizeError(f"无效的目标尺寸: {pixel_size}")
    if pixel_size > image.width:
        raise UpscaleNotAllowedError(
            f"目标尺寸 {pixel_size}px 大于源图宽度 {image.width}px"
        )

    try:
        source = image if image.mode == "RGBA" else image.convert("RGBA")
        return source.resize((pixel_size, pixel_size), RESAMPLE_FILTER)
    except (ValueError, OSError, MemoryError) as exc:
        raise IconResizeError(f"缩放到 {pixel_size}px 失败: {exc}") from exc
