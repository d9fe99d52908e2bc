"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from iconsync.core.config import DEFAULT_ICONSET_DIR, DEFAULT_RES_DIR, SyncConfig
from iconsync.core.exceptions import InvalidConfigurationError
from iconsync.core.icon_specs import IOS_ICON_SPECS
from iconsync.core.progress import ProgressUpdate
from iconsync.core.report import summarize
from iconsync.processing.pipeline import sync_icons
from iconsync.utils.logging import setup_logging

app = typer.Typer(help="将 Android 启动图标同步为 iOS AppIcon 资源。")


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if update.total == 0:
            return
        if task_id is None:
            task_id = progress.add_task("生成图标", total=update.total)
        description = update.filename or "生成图标"
        progress.update(task_id, completed=update.completed, description=description)

    return callback


@app.command("sync")
def sync_cli(
    res_dir: Path = typer.Option(
        DEFAULT_RES_DIR, "--res-dir", envvar="ICONSYNC_RES_DIR", help="Android res 目录（包含 mipmap-*）"
    ),
    iconset_dir: Path = typer.Option(
        DEFAULT_ICONSET_DIR, "--iconset-dir", envvar="ICONSYNC_ICONSET_DIR", help="iOS AppIcon.appiconset 目录"
    ),
    codec: str = typer.Option("pillow", "--codec", help="编解码器，pillow 或 dwebp"),
    dwebp_path: str = typer.Option("dwebp", "--dwebp-path", help="dwebp 可执行文件路径"),
    store_icon: Optional[Path] = typer.Option(None, "--store-icon", help="用于 App Store 图标的高分辨率图片，默认取 res 上一级的 ic_launcher-playstore.png"),
    prune: bool = typer.Option(True, "--prune/--no-prune", help="删除本次未生成的旧图标"),
    report: Optional[Path] = typer.Option(None, "--report", help="CSV 报告输出路径"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """将 mipmap 源图标转换并同步到 iOS 资源目录。"""

    setup_logging(verbose)
    logging.getLogger(__name__).debug("CLI 参数解析完成")

    config = SyncConfig(
        source_root=res_dir.expanduser().resolve(),
        dest_root=iconset_dir.expanduser().resolve(),
        codec=codec,
        dwebp_path=dwebp_path,
        store_icon=store_icon.expanduser().resolve() if store_icon else None,
        prune_stale=prune,
        report_path=report.expanduser().resolve() if report else None,
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
    )

    try:
        with progress:
            result = sync_icons(config, progress_callback=_build_progress_callback(progress))
    except InvalidConfigurationError as exc:
        typer.echo(f"配置错误：{exc}", err=True)
        raise typer.Exit(code=1) from exc

    if result.aborted:
        typer.echo(f"同步中止：{result.status}", err=True)
        raise typer.Exit(code=1)

    prefix = "同步完成（部分失败）" if result.degraded else "同步完成"
    typer.echo(f"{prefix}：{summarize(result)}")
    if result.manifest_path is not None:
        typer.echo(f"清单文件：{result.manifest_path}")


@app.command("specs")
def specs_cli() -> None:
    """列出将要生成的 iOS 图标规格。"""

    table = Table(title="iOS AppIcon")
    for column in ("filename", "size", "idiom", "scale", "pixels"):
        table.add_column(column)
    for spec in IOS_ICON_SPECS:
        table.add_row(spec.filename, spec.size, spec.idiom, spec.scale_label, str(spec.pixel_size))
    Console().print(table)


if __name__ == "__main__":
    app()
