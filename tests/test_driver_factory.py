import pytest

from pattern_framework.driver import driver_factory
from pattern_framework.driver.driver_factory import (
    BrowserKind,
    ChromeDriverFactory,
    EdgeDriverFactory,
    FirefoxDriverFactory,
    get_factory,
)
from pattern_framework.errors import UnsupportedBrowserError


@pytest.mark.parametrize(
    "browser, expected",
    [
        ("chrome", ChromeDriverFactory),
        ("Firefox", FirefoxDriverFactory),
        (" EDGE ", EdgeDriverFactory),
        (BrowserKind.EDGE, EdgeDriverFactory),
    ],
)
def test_get_factory_dispatch(browser, expected):
    factory = get_factory(browser)
    assert isinstance(factory, expected)
    assert factory.supports_headless()


def test_get_factory_unknown_browser():
    with pytest.raises(UnsupportedBrowserError, match="safari"):
        get_factory("safari")
    with pytest.raises(ValueError):
        get_factory("")


def test_remote_flag_in_error_message():
    with pytest.raises(UnsupportedBrowserError, match="remote execution"):
        get_factory("opera", remote=True)


def test_chrome_options_headless():
    options = ChromeDriverFactory(headless=True).build_options()
    assert "--headless=new" in options.arguments
    assert "--no-sandbox" in options.arguments
    assert "--disable-gpu" in options.arguments


def test_chrome_remote_options_skip_gpu_flag():
    options = ChromeDriverFactory().build_options(remote=True)
    assert "--disable-gpu" not in options.arguments
    assert not any(arg.startswith("--headless") for arg in options.arguments)


def test_firefox_options_headless():
    assert "-headless" in FirefoxDriverFactory(headless=True).build_options().arguments
    assert "-headless" not in FirefoxDriverFactory().build_options().arguments


def test_edge_options_headless():
    options = EdgeDriverFactory(headless=True).build_options()
    assert "--headless=new" in options.arguments


def test_browser_type():
    assert FirefoxDriverFactory().browser_type == "firefox"


def test_create_driver_uses_configuration(monkeypatch, clean_config):
    clean_config("browser: edge\nheadless: true\n")
    launched = []

    def fake_launch(self, options):
        launched.append((self.browser_type, list(options.arguments)))
        return "edge-driver"

    monkeypatch.setattr(EdgeDriverFactory, "_launch_local", fake_launch)

    assert driver_factory.create_driver() == "edge-driver"
    assert launched[0][0] == "edge"
    assert "--headless=new" in launched[0][1]


def test_create_remote_driver_passes_grid_url(monkeypatch):
    calls = {}

    class FakeRemote:
        def __init__(self, command_executor, options):
            calls["executor"] = command_executor
            calls["options"] = options

    monkeypatch.setattr(driver_factory.webdriver, "Remote", FakeRemote)

    drv = FirefoxDriverFactory(headless=True).create_remote_driver("http://grid:4444")

    assert isinstance(drv, FakeRemote)
    assert calls["executor"] == "http://grid:4444"
    assert "-headless" in calls["options"].arguments
