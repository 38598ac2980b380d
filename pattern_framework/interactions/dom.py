from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait


class DomMixin:
    """
    中文：DOM 交互混入类，提供基础元素操作。
    English: DOM interaction mixin providing basic element operations.
    """

    def _get_locator(self, name, **params):
        return self._locators.get(name, **params)

    def _find(self, name, **params):
        """
        中文：按主定位器查找元素，找不到直接抛出异常。
        参数:
            name: 定位器名称。
            params: 定位器占位符参数。
        """

        by, value = self._get_locator(name, **params)
        return self._driver.find_element(by, value)

    def _find_all(self, name, **params):
        by, value = self._get_locator(name, **params)
        return self._driver.find_elements(by, value)

    def _find_with_fallback(self, name, timeout=None, **params):
        """
        中文：依次尝试主定位器与备用定位器，返回第一个出现的元素。
        参数:
            name: 定位器名称。
            timeout: 每个定位器的等待时间（秒），为空则使用页面默认值。
            params: 定位器占位符参数。
        """

        timeout = self._timeout if timeout is None else timeout
        for locator in self._locators.get_all(name, **params):
            try:
                return WebDriverWait(self._driver, timeout).until(
                    EC.presence_of_element_located(locator)
                )
            except TimeoutException:
                self._log.debug(f"[FALLBACK] {self._page_name}.{name} not found with {locator}")
        raise RuntimeError(
            f"Could not find element {self._page_name}.{name} with any of the provided locators"
        )

    def open(self, url: str):
        self._log.info(f"[OPEN] {self._page_name} -> {url}")
        self._driver.get(url)

    def click(self, name, **params):
        self._log.debug(f"[CLICK] {self._page_name}.{name}")
        self._find(name, **params).click()

    def input(self, name, text):
        """
        中文：清空后输入文本。
        参数:
            name: 定位器名称。
            text: 需要输入的文本。
        """

        el = self._find(name)
        el.clear()
        el.send_keys(text)

    def type_into(self, element, text):
        element.clear()
        element.send_keys(text)

    @property
    def title(self) -> str:
        return self._driver.title

    @property
    def current_url(self) -> str:
        return self._driver.current_url

    @property
    def page_source(self) -> str:
        return self._driver.page_source
