"""测试公共夹具。"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


def make_icon(size: int) -> Image.Image:
    """透明背景、中心为不透明方块的测试图标。"""

    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    inner = max(size // 2, 1)
    offset = (size - inner) // 2
    image.paste(Image.new("RGBA", (inner, inner), (30, 144, 255, 255)), (offset, offset))
    return image


@pytest.fixture
def write_icon() -> Callable[..., Path]:
    def _write(path: Path, size: int, image_format: str = "WEBP") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        params = {"lossless": True} if image_format == "WEBP" else {}
        make_icon(size).save(path, format=image_format, **params)
        return path

    return _write
