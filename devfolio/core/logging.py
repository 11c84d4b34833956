"""日志配置（Loguru）

请求内的日志由 LoggingMiddleware 通过 logger.contextualize 绑定 request_id；
请求之外（启动、关闭）的日志 request_id 显示为 "-"。
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from loguru import logger

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FILE_NAME = "devfolio.log"

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[request_id]}</cyan> | "
    "{name}:{line} - <level>{message}</level>"
)

# 第三方库只保留 WARNING 及以上
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


class InterceptHandler(logging.Handler):
    """把标准库 logging 的记录转交给 Loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # 跳过 logging 模块自身的栈帧，让 Loguru 显示真正的调用位置
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    *,
    level: LogLevel = "INFO",
    json_format: bool = False,
    to_file: bool = False,
    log_dir: str | Path = "logs",
) -> None:
    """配置 stderr 输出，可选按大小轮转的日志文件；json_format 时输出结构化 JSON"""
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    sink_options = {"level": level, "serialize": json_format}
    if not json_format:
        sink_options["format"] = _TEXT_FORMAT
    logger.add(sys.stderr, **sink_options)

    if to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / LOG_FILE_NAME,
            enqueue=True,
            rotation="10 MB",
            retention="7 days",
            **sink_options,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
