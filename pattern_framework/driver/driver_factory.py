from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from pattern_framework.errors import UnsupportedBrowserError
from pattern_framework.utils.config_loader import ConfigReader
from pattern_framework.utils.logger import get_logger

log = get_logger()


class BrowserKind(str, Enum):
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def parse(cls, value, remote: bool = False) -> "BrowserKind":
        """
        中文：将配置中的浏览器字符串解析为枚举值。
        参数:
            value: 浏览器名称，大小写不敏感。
            remote: 是否为远程执行，仅用于错误信息。
        """

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise UnsupportedBrowserError(str(value), remote=remote) from None


class BrowserDriverFactory(ABC):
    """
    中文：浏览器驱动工厂基类，负责构建本地与远程 WebDriver。
    English: Base browser driver factory building local and remote WebDrivers.
    """

    browser_kind: BrowserKind

    def __init__(self, headless: bool = False):
        self.headless = headless

    @property
    def browser_type(self) -> str:
        return self.browser_kind.value

    def supports_headless(self) -> bool:
        return True

    @abstractmethod
    def build_options(self, remote: bool = False):
        """
        中文：构建浏览器启动参数。
        参数:
            remote: 是否用于 Selenium Grid 远程会话。
        """

    @abstractmethod
    def _launch_local(self, options):
        """启动本地浏览器进程。"""

    def create_driver(self):
        """
        中文：创建本地 WebDriver，驱动程序由 Selenium Manager 自动解析。
        """

        driver = self._launch_local(self.build_options(remote=False))
        log.info("Created local %s WebDriver (headless=%s)", self.browser_type, self.headless)
        return driver

    def create_remote_driver(self, grid_url: str):
        """
        中文：在 Selenium Grid 上创建远程 WebDriver。
        参数:
            grid_url: Grid Hub 地址。
        """

        driver = webdriver.Remote(
            command_executor=grid_url,
            options=self.build_options(remote=True),
        )
        log.info("Created remote %s WebDriver with Grid URL: %s", self.browser_type, grid_url)
        return driver


class ChromeDriverFactory(BrowserDriverFactory):
    browser_kind = BrowserKind.CHROME

    def build_options(self, remote: bool = False):
        options = ChromeOptions()
        if self.headless:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        if not remote:
            options.add_argument("--disable-gpu")
        return options

    def _launch_local(self, options):
        return webdriver.Chrome(options=options)


class FirefoxDriverFactory(BrowserDriverFactory):
    browser_kind = BrowserKind.FIREFOX

    def build_options(self, remote: bool = False):
        options = FirefoxOptions()
        if self.headless:
            options.add_argument("-headless")
        return options

    def _launch_local(self, options):
        return webdriver.Firefox(options=options)


class EdgeDriverFactory(BrowserDriverFactory):
    browser_kind = BrowserKind.EDGE

    def build_options(self, remote: bool = False):
        options = EdgeOptions()
        if self.headless:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        return options

    def _launch_local(self, options):
        return webdriver.Edge(options=options)


_FACTORIES: dict[BrowserKind, type[BrowserDriverFactory]] = {
    BrowserKind.CHROME: ChromeDriverFactory,
    BrowserKind.FIREFOX: FirefoxDriverFactory,
    BrowserKind.EDGE: EdgeDriverFactory,
}


def get_factory(browser, headless: bool = False, remote: bool = False) -> BrowserDriverFactory:
    """
    中文：根据浏览器类型返回对应的驱动工厂。
    参数:
        browser: 浏览器类型，可为 chrome、edge、firefox。
        headless: 是否无头模式。
        remote: 是否为远程执行，仅影响错误信息。
    """

    kind = BrowserKind.parse(browser, remote=remote)
    return _FACTORIES[kind](headless=headless)


def create_driver(browser: str | None = None, headless: bool | None = None):
    """
    中文：根据配置创建并返回本地浏览器驱动。
    参数:
        browser: 浏览器类型，未传则读取配置。
        headless: 是否无头模式，未传则读取配置。
    """

    if browser is None:
        browser = ConfigReader.browser()
    if headless is None:
        headless = ConfigReader.is_headless()
    return get_factory(browser, headless=headless).create_driver()
