"""可插拔的解码与缩放实现。

同步流水线只依赖 IconCodec 接口：

- ``PillowCodec``：进程内使用 Pillow 解码与缩放；
- ``DwebpCodec``：调用外部 ``dwebp`` 程序解码与缩放 WebP 源图标。
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from iconsync.core.config import SyncConfig
from iconsync.core.exceptions import (
    IconResizeError,
    ImageLoadingError,
    InvalidConfigurationError,
    UpscaleNotAllowedError,
)
from iconsync.core.models import DecodedImage, DecodeResult
from iconsync.core.output_manager import save_image_file
from iconsync.processing.image_loader import load_image
from iconsync.processing.resizer import resize_icon

LOGGER = logging.getLogger(__name__)


class IconCodec:
    """解码 + 缩放能力的抽象接口。"""

    name = "base"

    def decode(self, path: Path) -> DecodeResult:
        """解码源图标。失败时返回带 error 的 DecodeResult，而不是抛出异常。"""

        raise NotImplementedError

    def render(self, decoded: DecodedImage, pixel_size: int, destination: Path) -> None:
        """缩放并写出单个图标。失败时抛出 IconResizeError 或 ImageWriteError。"""

        raise NotImplementedError


class PillowCodec(IconCodec):
    """进程内 Pillow 实现。"""

    name = "pillow"

    def decode(self, path: Path) -> DecodeResult:
        try:
            image = load_image(path)
        except ImageLoadingError as exc:
            return DecodeResult(error=str(exc))

        if image.width <= 0 or image.height <= 0:
            image.close()
            return DecodeResult(error=f"图像尺寸无效: {path}")

        return DecodeResult(
            image=DecodedImage(source_path=path, width=image.width, height=image.height, payload=image)
        )

    def render(self, decoded: DecodedImage, pixel_size: int, destination: Path) -> None:
        if decoded.payload is None:
            raise IconResizeError(f"源图像已释放: {decoded.source_path}")

        resized = resize_icon(decoded.payload, pixel_size)
        try:
            save_image_file(resized, destination)
        finally:
            resized.close()


class DwebpCodec(IconCodec):
    """调用外部 dwebp 程序的实现（需要安装 libwebp 工具，例如 ``brew install webp``）。"""

    name = "dwebp"

    def __init__(self, executable: str = "dwebp") -> None:
        self.executable = executable

    def decode(self, path: Path) -> DecodeResult:
        try:
            if path.stat().st_size == 0:
                return DecodeResult(error=f"源图标为空文件: {path}")
        except OSError as exc:
            return DecodeResult(error=f"无法访问源图标 {path}: {exc}")

        # 解码为 PAM 并输出到 stdout，仅解析头部取得宽高。
        try:
            completed = self._run([str(path), "-pam", "-o", "-"])
        except OSError as exc:
            return DecodeResult(error=f"无法执行 {self.executable}，请确认已安装并位于 PATH 中: {exc}")

        if completed.returncode != 0:
            detail = _decode_stderr(completed.stderr)
            return DecodeResult(error=f"{self.executable} 解码失败 (exit {completed.returncode}): {detail}")

        size = parse_pam_header(completed.stdout)
        if size is None:
            return DecodeResult(error=f"无法解析 {self.executable} 的输出: {path}")

        width, height = size
        return DecodeResult(image=DecodedImage(source_path=path, width=width, height=height))

    def render(self, decoded: DecodedImage, pixel_size: int, destination: Path) -> None:
        if pixel_size > decoded.width:
            raise UpscaleNotAllowedError(
                f"目标尺寸 {pixel_size}px 大于源图宽度 {decoded.width}px"
            )

        args = [
            "-resize",
            str(pixel_size),
            str(pixel_size),
            str(decoded.source_path),
            "-o",
            str(destination),
        ]
        try:
            completed = self._run(args)
        except OSError as exc:
            raise IconResizeError(f"无法执行 {self.executable}: {exc}") from exc

        if completed.returncode != 0:
            detail = _decode_stderr(completed.stderr)
            raise IconResizeError(f"{self.executable} 缩放失败 (exit {completed.returncode}): {detail}")

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        command = [self.executable, *args]
        LOGGER.debug("执行命令: %s", " ".join(command))
        return subprocess.run(command, capture_output=True, check=False)


def parse_pam_header(data: bytes) -> Optional[tuple[int, int]]:
    """从 PAM (P7) 数据头中解析宽高。"""

    header, sep, _ = data.partition(b"ENDHDR")
    if not sep or not header.startswith(b"P7"):
        return None

    fields: dict[str, int] = {}
    for line in header.decode("ascii", errors="replace").splitlines()[1:]:
        parts = line.split()
        if len(parts) == 2 and parts[0] in {"WIDTH", "HEIGHT"}:
            try:
                fields[parts[0]] = int(parts[1])
            except ValueError:
                return None

    width = fields.get("WIDTH")
    height = fields.get("HEIGHT")
    if not width or not height or width <= 0 or height <= 0:
        return None
    return width, height


def _decode_stderr(stderr: Optional[bytes]) -> str:
    if not stderr:
        return "无错误输出"
    return stderr.decode("utf-8", errors="replace").strip()


def create_codec(config: SyncConfig) -> IconCodec:
    """根据配置选择编解码器。"""

    if config.codec == "pillow":
        return PillowCodec()
    if config.codec == "dwebp":
        return DwebpCodec(config.dwebp_path)
    raise InvalidConfigurationError(f"未知的编解码器: {config.codec}")
