"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

GENERATED = "generated"
SKIPPED_TOO_SMALL = "skipped-too-small"
ERROR_RESIZE = "error-resize"
ERROR_WRITE = "error-write"

STATUS_COMPLETED = "completed"
STATUS_DEGRADED = "degraded"
STATUS_SOURCE_NOT_FOUND = "error-source-not-found"
STATUS_SOURCE_UNREADABLE = "error-source-unreadable"


@dataclass(frozen=True, slots=True)
class IconSpec:
    """单个目标图标的规格。"""

    size: str
    idiom: str
    scale: int
    filename: str
    pixel_size: int

    def __post_init__(self) -> None:
        if self.pixel_size <= 0:
            raise ValueError(f"pixel_size 必须大于 0: {self.filename}")
        if self.scale <= 0:
            raise ValueError(f"scale 必须大于 0: {self.filename}")

    @property
    def scale_label(self) -> str:
        return f"{self.scale}x"

    def to_manifest_entry(self) -> dict[str, str]:
        """转换为 Contents.json 中的一条 images 记录。"""

        return {
            "size": self.size,
            "idiom": self.idiom,
            "filename": self.filename,
            "scale": self.scale_label,
        }


@dataclass(slots=True)
class DecodedImage:
    """解码后的源图标。

    payload 由具体编解码器决定：Pillow 编解码器为 RGBA 的 Image 对象，
    dwebp 编解码器为 None（每次渲染都重新读取源文件）。
    """

    source_path: Path
    width: int
    height: int
    payload: Any = None

    def close(self) -> None:
        close = getattr(self.payload, "close", None)
        if close is not None:
            close()
        self.payload = None


@dataclass(slots=True)
class DecodeResult:
    """解码结果：成功时携带 image，失败时携带 error。"""

    image: Optional[DecodedImage] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.image is not None


@dataclass(slots=True)
class IconOutcome:
    """记录单个图标规格的处理结果（用于报告/日志）。"""

    spec: IconSpec
    status: str
    output_path: Optional[Path] = None
    message: Optional[str] = None
    required_size: Optional[int] = None
    source_size: Optional[int] = None


@dataclass(slots=True)
class SyncResult:
    """一次同步的最终产出。"""

    status: str
    source_path: Optional[Path] = None
    manifest_path: Optional[Path] = None
    manifest_error: Optional[str] = None
    generated: list[IconOutcome] = field(default_factory=list)
    skipped: list[IconOutcome] = field(default_factory=list)
    failed: list[IconOutcome] = field(default_factory=list)
    pruned: list[Path] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.status in {STATUS_SOURCE_NOT_FOUND, STATUS_SOURCE_UNREADABLE}

    @property
    def degraded(self) -> bool:
        return self.status == STATUS_DEGRADED

    def all_outcomes(self) -> list[IconOutcome]:
        """返回所有结果记录，方便生成报告。"""

        return [*self.generated, *self.skipped, *self.failed]
