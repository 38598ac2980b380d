from __future__ import annotations

import os
import threading
from pathlib import Path

import yaml

from pattern_framework.utils.logger import get_logger, log_section

PROJECT_ROOT = Path(__file__).resolve().parents[2]

CONFIG_FILE = "config/config.yaml"
TEST_DATA_FILE = "config/testdata.yaml"

_TRUE_VALUES = {"true", "1", "yes", "on"}

log = get_logger()


def _resolve(path: str | Path) -> Path:
    p = Path(path)
    if not p.is_absolute():
        p = (PROJECT_ROOT / p).resolve()
    return p


def _flatten(data: dict, prefix: str = "") -> dict:
    """
    中文：将嵌套字典展开为点号分隔的键，例如 remote.execution。
    参数:
        data: YAML 读取出的字典。
        prefix: 当前层级的键前缀。
    """

    flat = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def load_config(path: str | Path = CONFIG_FILE) -> dict:
    """
    中文：加载 YAML 配置文件并返回扁平化后的字典，文件不存在时返回空配置。
    参数:
        path: 配置文件路径，支持相对项目根目录的路径。
    """

    p = _resolve(path)
    if not p.exists():
        log.warning("Configuration file %s not found, using default values", p)
        cfg = {}
    else:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping: {p}")
        cfg = _flatten(data)
        log.info("Configuration properties loaded successfully from %s", p)
    cfg["_project_root"] = str(PROJECT_ROOT)
    return cfg


def _env_key(key: str) -> str:
    return key.upper().replace(".", "_")


class ConfigReader:
    """
    中文：集中式配置读取器。查找顺序：运行时覆盖 -> 环境变量 -> 配置文件 -> 默认值。
    English: Central configuration reader. Lookup order is runtime override,
    environment variable, config file, then the caller's default.
    """

    _loaded = False
    _lock = threading.Lock()
    _config_path: str | Path = CONFIG_FILE
    _testdata_path: str | Path = TEST_DATA_FILE
    _properties: dict = {}
    _test_data: dict = {}
    _overrides: dict = {}

    @classmethod
    def _load(cls) -> None:
        if cls._loaded:
            return
        with cls._lock:
            if cls._loaded:
                return
            cls._properties = load_config(cls._config_path)
            cls._test_data = load_config(cls._testdata_path)
            cls._loaded = True

    @classmethod
    def reload(
        cls,
        config_path: str | Path | None = None,
        testdata_path: str | Path | None = None,
    ) -> None:
        """
        中文：切换配置文件并在下次读取时重新加载。
        参数:
            config_path: 主配置文件路径，为空则使用默认路径。
            testdata_path: 测试数据文件路径，为空则使用默认路径。
        """

        with cls._lock:
            cls._config_path = config_path or CONFIG_FILE
            cls._testdata_path = testdata_path or TEST_DATA_FILE
            cls._loaded = False

    @classmethod
    def set_override(cls, key: str, value) -> None:
        cls._overrides[key] = value

    @classmethod
    def clear_overrides(cls) -> None:
        cls._overrides.clear()

    @classmethod
    def get_property(cls, key: str, default=None):
        """
        中文：读取配置项。
        参数:
            key: 点号分隔的配置键，例如 grid.url。
            default: 所有来源都未配置时的返回值。
        """

        cls._load()

        value = cls._overrides.get(key)
        if value is not None and value != "":
            return value

        value = os.environ.get(_env_key(key))
        if value:
            return value

        value = cls._properties.get(key)
        if value is not None:
            return value
        return default

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        value = cls.get_property(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES

    @classmethod
    def get_int(cls, key: str, default: int) -> int:
        value = cls.get_property(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            log.warning(
                "Invalid integer value for key %s: %s, using default: %s",
                key, value, default,
            )
            return default

    @classmethod
    def get_test_data(cls, key: str, default=None):
        cls._load()
        value = cls._test_data.get(key)
        return default if value is None else value

    # Browser
    @classmethod
    def browser(cls) -> str:
        return str(cls.get_property("browser", "chrome"))

    @classmethod
    def is_headless(cls) -> bool:
        return cls.get_bool("headless", False)

    @classmethod
    def is_remote_execution(cls) -> bool:
        return cls.get_bool("remote.execution", False)

    @classmethod
    def grid_url(cls) -> str:
        return str(cls.get_property("grid.url", "http://localhost:4444"))

    # Timeouts (seconds)
    @classmethod
    def implicit_wait(cls) -> int:
        return cls.get_int("implicit.wait", 10)

    @classmethod
    def explicit_wait(cls) -> int:
        return cls.get_int("explicit.wait", 20)

    @classmethod
    def page_load_timeout(cls) -> int:
        return cls.get_int("page.load.timeout", 30)

    # Application / environment
    @classmethod
    def spicejet_url(cls) -> str:
        return str(cls.get_property("spicejet.url", "https://www.spicejet.com/"))

    @classmethod
    def screenshot_path(cls) -> str:
        return str(cls.get_property("screenshot.path", "output/screenshots"))

    @classmethod
    def environment(cls) -> str:
        return str(cls.get_property("environment", "local"))

    # Test data
    @classmethod
    def from_city(cls) -> str:
        return str(cls.get_test_data("spicejet.from.city", "Delhi"))

    @classmethod
    def to_city(cls) -> str:
        return str(cls.get_test_data("spicejet.to.city", "Mumbai"))

    @classmethod
    def trip_type(cls) -> str:
        return str(cls.get_test_data("spicejet.trip.type", "One Way"))

    @classmethod
    def log_all_properties(cls) -> None:
        """
        中文：输出所有已加载的配置项，便于调试。
        """

        cls._load()
        log_section("Configuration Properties")
        for key, value in cls._properties.items():
            if not key.startswith("_"):
                log.info("%s = %s", key, value)

        log_section("Test Data Properties")
        for key, value in cls._test_data.items():
            if not key.startswith("_"):
                log.info("%s = %s", key, value)

        log_section("Runtime Overrides")
        for key, value in cls._overrides.items():
            log.info("%s = %s (override)", key, value)
        for key in cls._properties:
            env_value = os.environ.get(_env_key(key))
            if env_value and key not in cls._overrides:
                log.info("%s = %s (environment override)", key, env_value)
