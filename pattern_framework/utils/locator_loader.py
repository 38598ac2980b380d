import os

import yaml
from selenium.webdriver.common.by import By


class LocatorLoader:
    """
    定位器加载器，负责读取并校验定位器配置。
    Locator loader that reads and validates locator configurations.
    """

    def __init__(self, yaml_path):
        """
        中文：读取定位器 YAML 文件。
        参数:
            yaml_path: 定位器 YAML 文件路径。
        """

        if not os.path.exists(yaml_path):
            raise FileNotFoundError(f"Locator file not found: {yaml_path}")
        with open(yaml_path, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f)

    def validate_all(self):
        """
        中文：校验定位器配置结构，包括备用定位器。
        """

        if not isinstance(self.data, dict):
            raise ValueError("Locator root must be a dict")

        for page, locators in self.data.items():
            if not isinstance(locators, dict):
                raise ValueError(f"Page {page} must be a dict")
            for name, locator in locators.items():
                if not isinstance(locator, dict) or "by" not in locator or "value" not in locator:
                    raise ValueError(f"{page}.{name} missing by/value")
                _convert_locator(locator["by"], locator["value"])
                for i, fallback in enumerate(locator.get("fallbacks") or []):
                    if not isinstance(fallback, dict) or "by" not in fallback or "value" not in fallback:
                        raise ValueError(f"{page}.{name}.fallbacks[{i}] missing by/value")
                    _convert_locator(fallback["by"], fallback["value"])

    def get(self, page, name):
        try:
            return self.data[page][name]
        except KeyError:
            raise KeyError(f"Locator not found: {page}.{name}")


class PageLocators:
    """
    页面定位器代理，转换为 Selenium 定位器。
    Page locator proxy that converts to Selenium locators.
    """

    def __init__(self, loader: LocatorLoader, page_name: str):
        self._loader = loader
        self._page_name = page_name

    def get(self, name, **params):
        """
        中文：获取页面主定位器并转换为 Selenium 定位器。
        参数:
            name: 定位器名称。
            params: 定位器值中 {占位符} 的替换参数。
        """

        locator = self._loader.get(self._page_name, name)
        return _convert_locator(locator["by"], _fill(locator["value"], params))

    def get_all(self, name, **params):
        """
        中文：获取主定位器及其备用定位器列表，按优先级排序。
        参数:
            name: 定位器名称。
            params: 定位器值中 {占位符} 的替换参数。
        """

        locator = self._loader.get(self._page_name, name)
        result = [_convert_locator(locator["by"], _fill(locator["value"], params))]
        for fallback in locator.get("fallbacks") or []:
            result.append(_convert_locator(fallback["by"], _fill(fallback["value"], params)))
        return result


def _fill(value: str, params: dict) -> str:
    return value.format(**params) if params else value


def _convert_locator(locator_type: str, locator_value: str):
    """
    中文：将定位器类型转换为 Selenium By。
    参数:
        locator_type: 定位器类型字符串。
        locator_value: 定位器值。
    """

    locator_type = (locator_type or "").lower()
    if locator_type == "id":
        return By.ID, locator_value
    if locator_type == "xpath":
        return By.XPATH, locator_value
    if locator_type == "name":
        return By.NAME, locator_value
    if locator_type == "css":
        return By.CSS_SELECTOR, locator_value
    if locator_type == "class":
        return By.CLASS_NAME, locator_value
    raise ValueError(f"Unsupported locator type: {locator_type}")


def build_page_locators(locator_loader, page_name: str):
    if isinstance(locator_loader, PageLocators):
        return locator_loader
    if page_name is None:
        return locator_loader
    return PageLocators(locator_loader, page_name)
