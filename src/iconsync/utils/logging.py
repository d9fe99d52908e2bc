"""日志配置。"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Pillow 在 DEBUG 级别会逐块输出 PNG/WebP 解析细节。
NOISY_LOGGERS = ("PIL",)


def setup_logging(verbose: bool = False) -> None:
    """初始化日志；verbose 时 iconsync 输出调试信息，第三方库保持 WARNING。"""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("iconsync").setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
