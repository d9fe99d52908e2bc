"""同步流水线：定位源图标、解码、逐个生成 iOS 图标并写出 Contents.json。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from iconsync.core.config import SyncConfig
from iconsync.core.exceptions import IconResizeError, ImageWriteError
from iconsync.core.icon_specs import IOS_ICON_SPECS, MARKETING_IDIOM
from iconsync.core.locator import describe_candidates, find_best_source_icon
from iconsync.core.manifest import write_manifest
from iconsync.core.models import (
    ERROR_RESIZE,
    ERROR_WRITE,
    GENERATED,
    SKIPPED_TOO_SMALL,
    STATUS_COMPLETED,
    STATUS_DEGRADED,
    STATUS_SOURCE_NOT_FOUND,
    STATUS_SOURCE_UNREADABLE,
    DecodedImage,
    IconOutcome,
    IconSpec,
    SyncResult,
)
from iconsync.core.output_manager import OutputManager
from iconsync.core.progress import ProgressUpdate
from iconsync.core.report import log_summary, write_csv_report
from iconsync.processing.codecs import IconCodec, create_codec

LOGGER = logging.getLogger(__name__)


ProgressCallback = Optional[Callable[[ProgressUpdate], None]]


def sync_icons(
    config: SyncConfig,
    specs: Sequence[IconSpec] = IOS_ICON_SPECS,
    codec: Optional[IconCodec] = None,
    progress_callback: ProgressCallback = None,
) -> SyncResult:
    """同步入口：定位、解码、按规格生成图标并写出清单。

    找不到源图标或源图标无法解码时直接返回中止状态，不写任何文件；
    单个图标失败只记录结果，循环始终跑完全部规格。
    """

    config.validate()
    codec = codec or create_codec(config)
    total = len(specs)

    LOGGER.info("开始同步 iOS 图标（编解码器：%s）", codec.name)
    source_path = find_best_source_icon(config.source_root)
    if source_path is None:
        LOGGER.error(
            "在 %s 的 mipmap-* 目录中找不到 %s",
            config.source_root,
            describe_candidates(),
        )
        _emit_progress(progress_callback, 0, total, "未找到源图标", status="error")
        return SyncResult(status=STATUS_SOURCE_NOT_FOUND)

    LOGGER.info("使用源图标：%s", source_path)
    decoded = codec.decode(source_path)
    source = decoded.image
    if source is None:
        LOGGER.error("无法读取源图标，文件可能已损坏或格式不受支持：%s", decoded.error)
        _emit_progress(progress_callback, 0, total, "源图标无法解码", status="error")
        return SyncResult(status=STATUS_SOURCE_UNREADABLE, source_path=source_path)

    LOGGER.info("源图标尺寸：%d x %d px", source.width, source.height)

    store_source = _decode_store_icon(codec, config.resolved_store_icon())
    result = SyncResult(status=STATUS_COMPLETED, source_path=source_path)
    output_manager = OutputManager(config.dest_root)

    try:
        output_manager.ensure_output_dir()
        _emit_progress(progress_callback, 0, total, "开始生成图标")

        for completed, spec in enumerate(specs, start=1):
            spec_source = source
            if store_source is not None and spec.idiom == MARKETING_IDIOM:
                spec_source = store_source

            outcome = _generate_icon(codec, output_manager, spec, spec_source)
            _record_outcome(outcome, result)
            _emit_progress(progress_callback, completed, total, outcome.status, filename=spec.filename)

        generated_specs = [outcome.spec for outcome in result.generated]
        try:
            result.manifest_path = write_manifest(output_manager.output_dir, generated_specs, order=specs)
        except OSError as exc:
            LOGGER.error("写入 Contents.json 失败：%s", exc)
            result.manifest_error = str(exc)

        if result.manifest_error:
            # 旧的 Contents.json 仍在磁盘上，保留它引用的图标。
            LOGGER.warning("Contents.json 未更新，跳过过期图标清理")
        elif config.prune_stale:
            result.pruned = output_manager.prune_stale(specs, generated_specs)
    finally:
        source.close()
        if store_source is not None:
            store_source.close()

    if result.failed or result.manifest_error:
        result.status = STATUS_DEGRADED

    if config.report_path is not None:
        _write_report(config.report_path, result)

    log_summary(result)
    _emit_progress(progress_callback, total, total, "同步完成", status=result.status)
    return result


def _generate_icon(
    codec: IconCodec,
    output_manager: OutputManager,
    spec: IconSpec,
    source: DecodedImage,
) -> IconOutcome:
    """生成单个图标；源图尺寸不足时跳过，不做放大。"""

    if spec.pixel_size > source.width:
        message = (
            f"源图标 ({source.width}px) 小于所需尺寸 ({spec.pixel_size}px)"
        )
        LOGGER.warning("已跳过 %s：%s", spec.filename, message)
        return IconOutcome(
            spec=spec,
            status=SKIPPED_TOO_SMALL,
            message=message,
            required_size=spec.pixel_size,
            source_size=source.width,
        )

    destination = output_manager.destination_for(spec)
    try:
        codec.render(source, spec.pixel_size, destination)
    except ImageWriteError as exc:
        LOGGER.error("生成 %s 失败：%s", spec.filename, exc)
        return _failure(spec, ERROR_WRITE, str(exc), source)
    except IconResizeError as exc:
        LOGGER.error("生成 %s 失败：%s", spec.filename, exc)
        return _failure(spec, ERROR_RESIZE, str(exc), source)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("生成 %s 时出现异常：%s", spec.filename, exc)
        return _failure(spec, ERROR_RESIZE, str(exc), source)

    LOGGER.info("已生成 %s (%d x %d px)", destination.name, spec.pixel_size, spec.pixel_size)
    return IconOutcome(
        spec=spec,
        status=GENERATED,
        output_path=destination,
        required_size=spec.pixel_size,
        source_size=source.width,
    )


def _failure(spec: IconSpec, status: str, message: str, source: DecodedImage) -> IconOutcome:
    return IconOutcome(
        spec=spec,
        status=status,
        message=message,
        required_size=spec.pixel_size,
        source_size=source.width,
    )


def _decode_store_icon(codec: IconCodec, store_icon: Optional[Path]) -> Optional[DecodedImage]:
    """解码可选的商店图标；缺失或无法解码时回退到启动图标。"""

    if store_icon is None:
        return None
    if not store_icon.is_file():
        LOGGER.warning("未找到商店图标 %s，将使用启动图标生成 App Store 图标", store_icon)
        return None

    decoded = codec.decode(store_icon)
    if not decoded.ok:
        LOGGER.warning("商店图标无法解码，将使用启动图标：%s", decoded.error)
        return None

    LOGGER.info("App Store 图标使用商店图标：%s", store_icon)
    return decoded.image


def _record_outcome(outcome: IconOutcome, result: SyncResult) -> None:
    if outcome.status == GENERATED:
        result.generated.append(outcome)
    elif outcome.status == SKIPPED_TOO_SMALL:
        result.skipped.append(outcome)
    else:
        result.failed.append(outcome)


def _emit_progress(
    callback: ProgressCallback,
    completed: int,
    total: int,
    message: Optional[str] = None,
    status: str = "running",
    filename: Optional[str] = None,
) -> None:
    if not callback:
        return
    callback(
        ProgressUpdate(total=total, completed=completed, filename=filename, message=message, status=status)
    )


def _write_report(report_path: Path, result: SyncResult) -> None:
    try:
        write_csv_report(result.all_outcomes(), report_path)
    except OSError as exc:
        LOGGER.error("写入报告失败：%s", exc)
