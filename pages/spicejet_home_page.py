from datetime import date, timedelta

from selenium.common.exceptions import TimeoutException, WebDriverException

from pattern_framework.core.base_page import BasePage
from pattern_framework.utils.config_loader import ConfigReader


class SpiceJetHomePage(BasePage):
    """
    中文：SpiceJet 首页页面对象，封装航班搜索流程。
    English: SpiceJet home page object wrapping the flight search flow.

    选择行程类型与等待搜索结果失败时直接抛出；城市、日期、搜索按钮等
    依赖页面改版的步骤采用备用定位器，失败只记录日志，由断言判断结果。
    """

    def __init__(self, driver, locator_loader=None, timeout=None):
        super().__init__(driver, locator_loader, page_name="SpiceJetHomePage", timeout=timeout)
        self._log.info("SpiceJetHomePage initialized")

    def navigate_to_home_page(self, url=None):
        """
        中文：打开 SpiceJet 首页，等待标题加载并关闭弹窗。
        参数:
            url: 首页地址，为空则读取 spicejet.url 配置。
        """

        self.open(url or ConfigReader.spicejet_url())
        self.wait_title_contains("SpiceJet")
        self._close_popup_if_present()
        self._log.info("Navigated to SpiceJet home page")
        return self

    def _close_popup_if_present(self):
        try:
            self.wait_clickable("close_popup").click()
            self._log.info("Closed popup")
        except WebDriverException:
            self._log.info("No popup found to close")

    def select_trip_type(self, trip_type: str):
        radio = "round_trip_radio" if (trip_type or "").lower() == "round trip" else "one_way_radio"
        try:
            self.wait_clickable(radio).click()
        except WebDriverException as exc:
            self._log.error(f"Error selecting trip type: {trip_type}: {exc}")
            raise RuntimeError(f"Failed to select trip type: {trip_type}") from exc
        self._log.info(f"Selected {trip_type}")
        return self

    def _enter_city(self, field: str, city: str):
        try:
            element = self._find_with_fallback(field)
            self.wait_clickable(element)
            self.type_into(element, city)
            self.wait_clickable("city_option", city=city).click()
            self._log.info(f"Selected {field}: {city}")
        except (RuntimeError, WebDriverException) as exc:
            self._log.error(f"Error entering {field}: {city}: {exc}")
        return self

    def enter_from_city(self, city: str):
        return self._enter_city("from_city_input", city)

    def enter_to_city(self, city: str):
        return self._enter_city("to_city_input", city)

    def select_departure_date(self, days_ahead: int = 7):
        """
        中文：选择若干天后的出发日期，失败时退而选择任意可用日期。
        参数:
            days_ahead: 距今天的天数。
        """

        future = date.today() + timedelta(days=days_ahead)
        try:
            field = self._find_with_fallback("departure_date_field")
            self.wait_clickable(field).click()
            self.wait_clickable("calendar_day", day=future.day).click()
            self._log.info(f"Selected departure date: {future.isoformat()}")
        except (RuntimeError, WebDriverException) as exc:
            self._log.error(f"Error selecting departure date: {exc}")
            try:
                self.wait_clickable("any_enabled_day").click()
                self._log.info("Selected alternative departure date")
            except WebDriverException as exc2:
                self._log.error(f"Failed to select any departure date: {exc2}")
        return self

    def click_search_flights(self):
        try:
            button = self._find_with_fallback("search_flights_button")
            self.wait_clickable(button).click()
            self._log.info("Clicked search flights button")
        except (RuntimeError, WebDriverException) as exc:
            self._log.error(f"Error clicking search flights button: {exc}")
        return self

    def wait_for_search_results(self):
        try:
            self.wait_present("search_results")
        except TimeoutException as exc:
            self._log.error("Search results did not load")
            raise RuntimeError("Search results did not load") from exc
        self._log.info("Search results loaded")
        return self

    def perform_flight_search(self, trip_type: str, from_city: str, to_city: str):
        return (
            self.select_trip_type(trip_type)
            .enter_from_city(from_city)
            .enter_to_city(to_city)
            .select_departure_date()
            .click_search_flights()
            .wait_for_search_results()
        )

    def available_flights_count(self) -> int:
        try:
            count = len(self.wait_all_present("flight_card"))
        except TimeoutException:
            self._log.warning("No flights found")
            return 0
        self._log.info(f"Found {count} available flights")
        return count

    def are_flights_displayed(self) -> bool:
        return self.available_flights_count() > 0

    def is_search_button_enabled(self) -> bool:
        try:
            return self._find("search_flights_button").is_enabled()
        except WebDriverException as exc:
            self._log.error(f"Error checking search button status: {exc}")
            return False

    def is_calendar_displayed(self) -> bool:
        try:
            return self.wait_present("calendar").is_displayed()
        except WebDriverException:
            self._log.info("Calendar not displayed")
            return False

    def is_no_flights_message_displayed(self) -> bool:
        try:
            source = self.page_source.lower()
        except WebDriverException as exc:
            self._log.warning(f"Error checking for no flights message: {exc}")
            return False
        return any(text in source for text in ("no flights", "no results", "not available"))
