from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait


class WaitMixin:
    """
    中文：等待交互混入类，提供页面与元素等待能力。
    English: Wait interaction mixin providing page and element waits.
    """

    def _wait(self, timeout=None):
        return WebDriverWait(self._driver, self._timeout if timeout is None else timeout)

    def wait_page_ready(self, timeout=30):
        """
        中文：等待页面加载完成且无活动请求。
        参数:
            timeout: 最大等待时间（秒）。
        """

        self._wait(timeout).until(
            lambda d: d.execute_script(
                """
                return document.readyState === 'complete'
                && (!window.jQuery || jQuery.active === 0)
            """
            )
        )

    def wait_title_contains(self, text, timeout=None):
        self._wait(timeout).until(EC.title_contains(text))

    def wait_visible(self, name, timeout=None, **params):
        by, value = self._get_locator(name, **params)
        return self._wait(timeout).until(
            EC.visibility_of_element_located((by, value))
        )

    def wait_present(self, name, timeout=None, **params):
        by, value = self._get_locator(name, **params)
        return self._wait(timeout).until(
            EC.presence_of_element_located((by, value))
        )

    def wait_all_present(self, name, timeout=None, **params):
        by, value = self._get_locator(name, **params)
        return self._wait(timeout).until(
            EC.presence_of_all_elements_located((by, value))
        )

    def wait_clickable(self, target, timeout=None, **params):
        """
        中文：等待元素可点击。
        参数:
            target: 定位器名称或已获取的 WebElement。
            timeout: 最大等待时间（秒）。
            params: 定位器占位符参数。
        """

        if isinstance(target, str):
            target = self._get_locator(target, **params)
        return self._wait(timeout).until(EC.element_to_be_clickable(target))
