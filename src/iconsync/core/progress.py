"""图标生成进度。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class ProgressUpdate:
    """每处理完一个图标规格推送一次；status 在结束时为同步结果状态。"""

    total: int
    completed: int
    filename: Optional[str] = None
    message: Optional[str] = None
    status: str = "running"

    @property
    def done(self) -> bool:
        return self.status != "running"
