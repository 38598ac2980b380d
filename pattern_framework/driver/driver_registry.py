"""
线程安全的单例驱动注册表。

Process-wide registry handing out one WebDriver per worker thread.

- the registry itself is created lazily, exactly once, with double-checked locking;
- configuration is read a single time when the registry is built;
- copies are rejected and unpickling resolves to the canonical instance;
- handles are keyed by a per-thread token kept in ``threading.local()``, so a
  new thread never inherits a finished thread's browser; they can be released
  per worker or all at once at the end of a run.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from urllib.parse import urlparse

from pattern_framework.driver import driver_factory
from pattern_framework.errors import (
    CloneNotSupportedError,
    RegistryAlreadyInitializedError,
    RemoteDriverCreationError,
)
from pattern_framework.utils.config_loader import ConfigReader
from pattern_framework.utils.logger import get_logger

log = get_logger()


@dataclass(frozen=True)
class DriverSettings:
    """
    中文：注册表构造时读取的配置快照，生命周期内不可变。
    English: Configuration snapshot taken once when the registry is built.
    """

    browser: str = "chrome"
    headless: bool = False
    remote_execution: bool = False
    grid_url: str = "http://localhost:4444"
    implicit_wait: int = 10
    page_load_timeout: int = 30

    @classmethod
    def from_config(cls) -> "DriverSettings":
        return cls(
            browser=ConfigReader.browser().strip().lower(),
            headless=ConfigReader.is_headless(),
            remote_execution=ConfigReader.is_remote_execution(),
            grid_url=ConfigReader.grid_url(),
            implicit_wait=ConfigReader.implicit_wait(),
            page_load_timeout=ConfigReader.page_load_timeout(),
        )


_worker_local = threading.local()
_worker_tokens = itertools.count(1)

# 仅 get_instance() 持有，直接调用 DriverRegistry() 一律拒绝
_CONSTRUCTION_TOKEN = object()


def _worker_id() -> int:
    """
    中文：返回当前线程的工作者令牌，令牌随线程存储销毁，不会被新线程复用。
    """

    token = getattr(_worker_local, "token", None)
    if token is None:
        token = next(_worker_tokens)
        _worker_local.token = token
    return token


def _parse_grid_url(grid_url: str) -> str:
    """
    中文：校验 Grid 地址，必须包含 http/https 协议与主机名。
    参数:
        grid_url: 配置中的 Grid 地址。
    """

    parsed = urlparse(str(grid_url or "").strip())
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"Malformed grid URL: {grid_url!r}")
    # 端口非法时 port 属性抛出 ValueError
    if parsed.port == 0:
        raise ValueError(f"Malformed grid URL: {grid_url!r}")
    return parsed.geturl()


class DriverRegistry:
    """
    中文：驱动注册表单例，按工作线程分配并回收 WebDriver。
    English: Singleton registry creating and disposing one WebDriver per worker.
    """

    _instance: "DriverRegistry | None" = None
    _lock = threading.Lock()

    def __init__(self, _token=None):
        if _token is not _CONSTRUCTION_TOKEN or DriverRegistry._instance is not None:
            raise RegistryAlreadyInitializedError(
                "DriverRegistry cannot be constructed directly! Use get_registry() instead."
            )

        self._settings = DriverSettings.from_config()
        self._handles: dict[int, object] = {}

        log.info(
            "DriverRegistry initialized with browser: %s, headless: %s, remote: %s",
            self._settings.browser,
            self._settings.headless,
            self._settings.remote_execution,
        )

    @classmethod
    def get_instance(cls) -> "DriverRegistry":
        """
        中文：获取注册表单例，首次调用时在锁内创建（双重检查）。
        """

        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(_CONSTRUCTION_TOKEN)
        return cls._instance

    @property
    def settings(self) -> DriverSettings:
        return self._settings

    def get_handle(self):
        """
        中文：获取当前线程的 WebDriver，不存在则按配置创建并登记。
        """

        worker = _worker_id()
        driver = self._handles.get(worker)
        if driver is None:
            driver = self._create_driver()
            self._configure_driver(driver)
            self._handles[worker] = driver
            log.info("Created new WebDriver instance for thread: %s", threading.current_thread().name)
        return driver

    def has_handle(self) -> bool:
        return _worker_id() in self._handles

    def _create_driver(self):
        if self._settings.remote_execution:
            return self._create_remote_driver()
        return self._create_local_driver()

    def _create_local_driver(self):
        factory = driver_factory.get_factory(
            self._settings.browser,
            headless=self._settings.headless,
        )
        return factory.create_driver()

    def _create_remote_driver(self):
        grid_url = self._settings.grid_url
        try:
            address = _parse_grid_url(grid_url)
            factory = driver_factory.get_factory(
                self._settings.browser,
                headless=self._settings.headless,
                remote=True,
            )
            return factory.create_remote_driver(address)
        except Exception as exc:
            log.error("Failed to create remote WebDriver: %s", exc)
            raise RemoteDriverCreationError(grid_url, str(exc)) from exc

    def _configure_driver(self, driver) -> None:
        """
        中文：为新建驱动设置隐式等待、页面加载超时并最大化窗口；失败时关闭驱动后抛出。
        参数:
            driver: 新建的 WebDriver 实例。
        """

        try:
            driver.implicitly_wait(self._settings.implicit_wait)
            driver.set_page_load_timeout(self._settings.page_load_timeout)
            driver.maximize_window()
        except Exception:
            self._quit_quietly(driver)
            raise

        log.info(
            "Configured WebDriver with implicit wait: %ss and page load timeout: %ss",
            self._settings.implicit_wait,
            self._settings.page_load_timeout,
        )

    @staticmethod
    def _quit_quietly(driver) -> bool:
        try:
            driver.quit()
            return True
        except Exception as exc:
            log.error("Error quitting WebDriver: %s", exc)
            return False

    def release_handle(self) -> None:
        """
        中文：关闭当前线程的 WebDriver，关闭失败只记录日志，登记项总会被移除。
        """

        driver = self._handles.pop(_worker_id(), None)
        if driver is None:
            return
        if self._quit_quietly(driver):
            log.info("WebDriver quit successfully for thread: %s", threading.current_thread().name)

    def release_all(self) -> None:
        """
        中文：关闭所有线程登记的 WebDriver 并清空登记表。
        """

        for worker in list(self._handles):
            driver = self._handles.pop(worker, None)
            if driver is not None:
                self._quit_quietly(driver)
        log.info("All WebDriver instances released")

    def active_handle_count(self) -> int:
        return len(self._handles)

    def __copy__(self):
        raise CloneNotSupportedError("Singleton instance cannot be cloned")

    def __deepcopy__(self, memo):
        raise CloneNotSupportedError("Singleton instance cannot be cloned")

    def __reduce__(self):
        return (get_registry, ())


def get_registry() -> DriverRegistry:
    return DriverRegistry.get_instance()
