"""
中文：框架共享日志。

All modules log through ``automation_logger``. Every record carries the
current test name and the worker thread, so interleaved output from
several workers holding their own browser can be told apart.

Environment:
    AUTOMATION_LOG_LEVEL  console level name (default INFO)
    AUTOMATION_LOG_DIR    directory for the run log file (default ./logs)
"""

import logging
import os
from contextvars import ContextVar
from datetime import datetime

LOGGER_NAME = "automation_logger"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(test)s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CURRENT_TEST: ContextVar[str] = ContextVar("CURRENT_TEST", default="-")


def set_current_test(name: str) -> None:
    """
    中文：设置当前测试名称，后续日志记录都会带上它。
    参数:
        name: 当前测试名称，为空时记为 "-"。
    """

    _CURRENT_TEST.set(name or "-")


def current_test() -> str:
    return _CURRENT_TEST.get()


class _TestContextFilter(logging.Filter):
    """
    中文：为日志记录补上测试名称，已显式传入 extra={"test": ...} 的记录保持不变。
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "test"):
            record.test = _CURRENT_TEST.get()
        return True


def console_level(default: int = logging.INFO) -> int:
    """
    中文：从 AUTOMATION_LOG_LEVEL 读取控制台级别，支持级别名或数字，无法识别时回退默认值。
    参数:
        default: 未设置或非法时使用的级别。
    """

    raw = os.environ.get("AUTOMATION_LOG_LEVEL", "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def log_file_path() -> str:
    log_dir = os.environ.get("AUTOMATION_LOG_DIR") or os.path.join(os.getcwd(), "logs")
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    # 多进程并行时按 pid 区分文件
    return os.path.join(log_dir, f"run_{stamp}_{os.getpid()}.log")


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(_TestContextFilter())
    logger.addHandler(handler)
    return handler


def get_logger() -> logging.Logger:
    """
    中文：获取全局日志记录器，首次调用时挂载控制台与文件处理器。
    English: Return the shared automation logger, configuring handlers once.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_automation_handlers", None):
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    path = log_file_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    logger._automation_handlers = (
        _attach(logger, logging.StreamHandler(), console_level()),
        _attach(logger, logging.FileHandler(path, encoding="utf-8"), logging.DEBUG),
    )
    return logger


def log_section(title: str, logger: logging.Logger | None = None) -> None:
    """
    中文：输出分隔标题行，如 "=== Test Suite Setup Started ==="。
    参数:
        title: 标题文本。
        logger: 目标日志记录器，默认为全局记录器。
    """

    (logger or get_logger()).info("=== %s ===", title, stacklevel=2)


class PageLoggerAdapter(logging.LoggerAdapter):
    """
    中文：页面级日志，消息前加页面名，便于区分多个页面对象的输出。
    """

    def process(self, msg, kwargs):
        return f"[{self.extra['page']}] {msg}", kwargs


def get_page_logger(page_name: str | None = None):
    """
    中文：获取页面级日志记录器，未给出页面名时返回全局记录器。
    参数:
        page_name: 页面名称，可为空。
    """

    logger = get_logger()
    if page_name:
        return PageLoggerAdapter(logger, {"page": page_name})
    return logger
