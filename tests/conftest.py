import threading

import pytest

from pattern_framework.driver import driver_factory
from pattern_framework.driver.driver_registry import DriverRegistry, get_registry
from pattern_framework.utils.config_loader import ConfigReader
from pattern_framework.utils.logger import get_logger, log_section

log = get_logger()

CONFIG_ENV_VARS = (
    "BROWSER",
    "HEADLESS",
    "REMOTE_EXECUTION",
    "GRID_URL",
    "IMPLICIT_WAIT",
    "PAGE_LOAD_TIMEOUT",
    "EXPLICIT_WAIT",
)


@pytest.fixture(scope="session")
def registry():
    """
    中文：套件级初始化注册表单例，会话结束时关闭所有残留驱动。
    """

    log_section("Test Suite Setup Started")
    ConfigReader.log_all_properties()
    reg = get_registry()
    log_section("Test Suite Setup Completed")

    yield reg

    log_section("Test Suite Teardown Started")
    reg.release_all()
    log_section("Test Suite Teardown Completed")


@pytest.fixture
def driver(registry, request):
    """
    中文：为当前用例所在线程获取 WebDriver，用例结束后释放。
    参数:
        registry: 驱动注册表单例。
        request: pytest 请求对象。
    """

    drv = registry.get_handle()
    settings = registry.settings
    log.info(
        "Browser: %s, Headless: %s, Remote: %s",
        settings.browser, settings.headless, settings.remote_execution,
    )

    yield drv

    registry.release_handle()
    log.info("WebDriver released for test: %s", request.node.name)


@pytest.fixture
def test_data():
    return {
        "from_city": ConfigReader.from_city(),
        "to_city": ConfigReader.to_city(),
        "trip_type": ConfigReader.trip_type(),
    }


# ---------------------------------------------------------------------------
# 单元测试夹具：不启动真实浏览器
# ---------------------------------------------------------------------------


class FakeDriver:
    """记录调用的 WebDriver 替身。"""

    _counter = 0
    _counter_lock = threading.Lock()

    def __init__(self, browser="chrome", headless=False, remote_url=None, fail_quit=False, fail_configure=False):
        with FakeDriver._counter_lock:
            FakeDriver._counter += 1
            self.session_id = f"fake-{FakeDriver._counter}"
        self.browser = browser
        self.headless = headless
        self.remote_url = remote_url
        self.fail_quit = fail_quit
        self.fail_configure = fail_configure
        self.implicit_wait = None
        self.page_load_timeout = None
        self.maximized = False
        self.quit_called = 0
        self.capabilities = {"browserName": browser}

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def maximize_window(self):
        if self.fail_configure:
            raise RuntimeError("window manager unavailable")
        self.maximized = True

    def quit(self):
        self.quit_called += 1
        if self.fail_quit:
            raise RuntimeError("browser already gone")


class FakeFactory(driver_factory.BrowserDriverFactory):
    """按 BrowserKind 生成 FakeDriver 的工厂，记录所有创建的驱动。"""

    created = []
    driver_kwargs = {}

    def __init__(self, kind, headless=False):
        super().__init__(headless=headless)
        self.browser_kind = kind

    def build_options(self, remote=False):
        return None

    def _launch_local(self, options):
        drv = FakeDriver(browser=self.browser_type, headless=self.headless, **FakeFactory.driver_kwargs)
        FakeFactory.created.append(drv)
        return drv

    def create_remote_driver(self, grid_url):
        drv = FakeDriver(
            browser=self.browser_type,
            headless=self.headless,
            remote_url=grid_url,
            **FakeFactory.driver_kwargs,
        )
        FakeFactory.created.append(drv)
        return drv


@pytest.fixture
def clean_config(monkeypatch, tmp_path):
    """
    中文：隔离配置：清除环境变量与运行时覆盖，并指向临时配置文件。
    返回一个函数，写入 YAML 文本后重新加载。
    """

    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    saved_overrides = dict(ConfigReader._overrides)
    ConfigReader.clear_overrides()

    def write(config_text="", testdata_text=""):
        cfg = tmp_path / "config.yaml"
        data = tmp_path / "testdata.yaml"
        cfg.write_text(config_text, encoding="utf-8")
        data.write_text(testdata_text, encoding="utf-8")
        ConfigReader.reload(cfg, data)

    write()
    yield write

    ConfigReader.clear_overrides()
    ConfigReader._overrides.update(saved_overrides)
    ConfigReader.reload()


@pytest.fixture
def fake_factories(monkeypatch):
    """将注册表的浏览器工厂替换为 FakeFactory。"""

    FakeFactory.created = []
    FakeFactory.driver_kwargs = {}

    def get_factory(browser, headless=False, remote=False):
        kind = driver_factory.BrowserKind.parse(browser, remote=remote)
        return FakeFactory(kind, headless=headless)

    monkeypatch.setattr(driver_factory, "get_factory", get_factory)
    return FakeFactory


@pytest.fixture
def fresh_registry(monkeypatch, clean_config, fake_factories):
    """
    中文：重置注册表单例，返回一个函数：写入配置后创建新的注册表。
    """

    monkeypatch.setattr(DriverRegistry, "_instance", None)
    created = []

    def build(config_text=""):
        clean_config(config_text)
        reg = get_registry()
        created.append(reg)
        return reg

    yield build

    for reg in created:
        reg.release_all()


pytest_plugins = ["tests.pytest_hooks"]
