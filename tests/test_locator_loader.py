import pytest
from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By

from pages.spicejet_home_page import SpiceJetHomePage
from pattern_framework.core.base_page import default_locator_loader
from pattern_framework.utils.locator_loader import LocatorLoader, PageLocators


def _write(tmp_path, text):
    path = tmp_path / "locators.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_project_locators_are_valid():
    loader = default_locator_loader()
    locators = PageLocators(loader, "SpiceJetHomePage")
    assert locators.get("flight_card") == (By.CSS_SELECTOR, "div[data-testid='flight-card']")
    assert len(locators.get_all("search_flights_button")) == 4


def test_placeholder_filled_at_lookup():
    locators = PageLocators(default_locator_loader(), "SpiceJetHomePage")
    by, value = locators.get("city_option", city="Goa")
    assert by == By.XPATH
    assert "'Goa'" in value


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LocatorLoader(str(tmp_path / "nope.yaml"))


def test_validate_rejects_bad_fallback(tmp_path):
    loader = LocatorLoader(_write(
        tmp_path,
        "Page:\n  button:\n    by: id\n    value: go\n    fallbacks:\n      - by: id\n",
    ))
    with pytest.raises(ValueError, match="fallbacks"):
        loader.validate_all()


def test_validate_rejects_unknown_locator_type(tmp_path):
    loader = LocatorLoader(_write(tmp_path, "Page:\n  button:\n    by: shadow\n    value: go\n"))
    with pytest.raises(ValueError, match="Unsupported locator type"):
        loader.validate_all()


def test_unknown_locator_name():
    with pytest.raises(KeyError):
        PageLocators(default_locator_loader(), "SpiceJetHomePage").get("nope")


class _Element:
    def __init__(self, locator):
        self.locator = locator


class _FallbackDriver:
    """只有 CSS 备用定位器能命中的驱动替身。"""

    def __init__(self):
        self.lookups = []

    def find_element(self, by, value):
        self.lookups.append((by, value))
        if by == By.CSS_SELECTOR and value == "input[placeholder*='From']":
            return _Element((by, value))
        raise NoSuchElementException(value)


def test_find_with_fallback_uses_next_locator():
    driver = _FallbackDriver()
    page = SpiceJetHomePage(driver, timeout=0)

    element = page._find_with_fallback("from_city_input")

    assert element.locator == (By.CSS_SELECTOR, "input[placeholder*='From']")
    assert driver.lookups[0][0] == By.XPATH


def test_find_with_fallback_exhausted():
    page = SpiceJetHomePage(_FallbackDriver(), timeout=0)
    with pytest.raises(RuntimeError, match="to_city_input"):
        page._find_with_fallback("to_city_input")
