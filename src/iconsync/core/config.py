"""同步任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from iconsync.core.exceptions import InvalidConfigurationError

DEFAULT_RES_DIR = Path("composeApp/src/androidMain/res")
DEFAULT_ICONSET_DIR = Path("iosApp/iosApp/Assets.xcassets/AppIcon.appiconset")

# Android Studio Image Asset 生成的商店图标，位于 res 目录的上一级。
STORE_ICON_FILENAME = "ic_launcher-playstore.png"

CodecName = str  # pillow | dwebp

VALID_CODECS = {"pillow", "dwebp"}


@dataclass(slots=True)
class SyncConfig:
    """单次图标同步任务的配置集合。"""

    source_root: Path = DEFAULT_RES_DIR
    dest_root: Path = DEFAULT_ICONSET_DIR
    codec: CodecName = "pillow"
    dwebp_path: str = "dwebp"
    store_icon: Optional[Path] = None
    prune_stale: bool = True
    report_path: Optional[Path] = None

    def validate(self) -> None:
        """检查配置取值，非法时抛出 InvalidConfigurationError。"""

        if self.codec not in VALID_CODECS:
            raise InvalidConfigurationError(f"未知的编解码器: {self.codec}")
        if self.codec == "dwebp" and not self.dwebp_path:
            raise InvalidConfigurationError("dwebp 编解码器需要指定可执行文件路径")
        if self.source_root.exists() and not self.source_root.is_dir():
            raise InvalidConfigurationError(f"资源目录不是文件夹: {self.source_root}")
        if self.dest_root.exists() and not self.dest_root.is_dir():
            raise InvalidConfigurationError(f"输出路径不是文件夹: {self.dest_root}")

    def resolved_store_icon(self) -> Path:
        """显式指定的商店图标，未指定时为 res 目录旁的 ic_launcher-playstore.png。"""

        if self.store_icon is not None:
            return self.store_icon
        return self.source_root.parent / STORE_ICON_FILENAME
