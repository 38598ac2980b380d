from pattern_framework.interactions.dom import DomMixin
from pattern_framework.interactions.wait import WaitMixin
from pattern_framework.utils.config_loader import PROJECT_ROOT, ConfigReader
from pattern_framework.utils.locator_loader import LocatorLoader, build_page_locators
from pattern_framework.utils.logger import get_page_logger

LOCATOR_FILE = PROJECT_ROOT / "config" / "locators.yaml"

_default_loader = None


def default_locator_loader() -> LocatorLoader:
    """
    中文：加载并校验项目默认的定位器文件，只加载一次。
    """

    global _default_loader
    if _default_loader is None:
        loader = LocatorLoader(str(LOCATOR_FILE))
        loader.validate_all()
        _default_loader = loader
    return _default_loader


class BasePage(
    DomMixin,
    WaitMixin,
):
    """
    页面基类，提供通用交互与日志能力。
    Base page class providing common interactions and logging.
    """

    def __init__(self, driver, locator_loader=None, page_name=None, timeout=None):
        """
        中文：初始化页面基类并绑定驱动与定位器。
        参数:
            driver: WebDriver 实例。
            locator_loader: 定位器加载器实例，为空则使用默认定位器文件。
            page_name: 页面名称，对应定位器文件中的顶层键。
            timeout: 显式等待时间（秒），为空则读取 explicit.wait 配置。
        """

        if locator_loader is None:
            locator_loader = default_locator_loader()
        self._driver = driver
        self._locators = build_page_locators(locator_loader, page_name)
        self._page_name = page_name
        self._timeout = ConfigReader.explicit_wait() if timeout is None else timeout
        self._log = get_page_logger(page_name)
