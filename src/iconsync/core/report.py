"""同步结果汇总与报告生成工具。"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from iconsync.core.models import IconOutcome, SyncResult

LOGGER = logging.getLogger(__name__)

HEADER = ["filename", "size", "idiom", "scale", "pixel_size", "status", "output_path", "message"]


def summarize(result: SyncResult) -> str:
    """生成一行汇总文本。"""

    return (
        f"生成 {len(result.generated)} 个，跳过 {len(result.skipped)} 个，"
        f"失败 {len(result.failed)} 个。"
    )


def log_summary(result: SyncResult) -> None:
    """按严重程度输出最终汇总。"""

    if result.failed:
        LOGGER.error("同步完成，但有 %d 个图标失败。%s", len(result.failed), summarize(result))
        for outcome in result.failed:
            LOGGER.error("  失败 %s：%s", outcome.spec.filename, outcome.message)
    else:
        LOGGER.info("同步完成！%s", summarize(result))

    for outcome in result.skipped:
        LOGGER.info("  跳过 %s：%s", outcome.spec.filename, outcome.message)
    if result.manifest_error:
        LOGGER.error("  Contents.json 未能写入：%s", result.manifest_error)


def write_csv_report(outcomes: Iterable[IconOutcome], report_path: Path) -> Path:
    """将处理结果写入 CSV 报告。"""

    report_path.parent.mkdir(parents=True, exist_ok=True)
    with report_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        for record in outcomes:
            spec = record.spec
            writer.writerow(
                [
                    spec.filename,
                    spec.size,
                    spec.idiom,
                    spec.scale_label,
                    spec.pixel_size,
                    record.status,
                    str(record.output_path) if record.output_path else "",
                    record.message or "",
                ]
            )
    return report_path
