"""Android mipmap 源图标定位逻辑。"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, Sequence

# 从高到低的密度档位。
DENSITY_TIERS: tuple[str, ...] = ("xxxhdpi", "xxhdpi", "xhdpi", "hdpi", "mdpi")

# 同一密度下优先完整启动图标，其次是自适应图标的前景层。
ICON_ROLES: tuple[str, ...] = ("ic_launcher", "ic_launcher_foreground")

SOURCE_EXTENSIONS: tuple[str, ...] = (".webp", ".png")


def iter_candidate_paths(
    root: Path,
    densities: Sequence[str] = DENSITY_TIERS,
    roles: Sequence[str] = ICON_ROLES,
    extensions: Sequence[str] = SOURCE_EXTENSIONS,
) -> Iterator[Path]:
    """按优先级依次产出候选路径：密度为外层，角色居中，扩展名最内层。"""

    for density in densities:
        mipmap_dir = root / f"mipmap-{density}"
        for role in roles:
            for ext in extensions:
                yield mipmap_dir / f"{role}{ext}"


def find_best_source_icon(
    root: Path,
    densities: Sequence[str] = DENSITY_TIERS,
    roles: Sequence[str] = ICON_ROLES,
    extensions: Sequence[str] = SOURCE_EXTENSIONS,
) -> Optional[Path]:
    """返回第一个存在的候选文件；全部不存在时返回 None。

    只做存在性检查，不读取文件内容。
    """

    for candidate in iter_candidate_paths(root, densities, roles, extensions):
        if candidate.is_file():
            return candidate
    return None


def describe_candidates(
    roles: Sequence[str] = ICON_ROLES,
    extensions: Sequence[str] = SOURCE_EXTENSIONS,
) -> str:
    """生成诊断信息中使用的候选文件名描述。"""

    names = [f"'{role}{ext}'" for role in roles for ext in extensions]
    return " 或 ".join(names)
