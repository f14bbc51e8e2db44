"""
Browser Manager - Shared headless Chrome for the scraper adapters

Owns one Selenium WebDriver for the whole process. The driver is launched
lazily on first use, checked before every use and relaunched if the session
died (up to `max_restarts` consecutive restarts), and quit on shutdown.

Each scrape gets its own tab through `page()`, which always closes the tab
again, on success, error or cancellation. A WebDriver session has a single
focused window, so tab use is serialized with an asyncio.Lock. Blocking
Selenium calls run in worker threads. A running WebDriver call cannot be
interrupted, so `run()` keeps the tab (and the lock) until its worker thread
has returned, even when the caller times out or is cancelled.
"""

import asyncio
from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Callable, Optional, TypeVar

import logfire
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.remote.webdriver import WebDriver

from backend.config import PAGE_LOAD_TIMEOUT

T = TypeVar("T")


class BrowserUnavailable(RuntimeError):
    """Raised when no working browser session can be provided."""


def create_chrome_driver(chrome_binary: Optional[str] = None) -> WebDriver:
    """Launch headless Chrome with container-friendly options."""
    chrome_options = Options()
    chrome_options.add_argument("--headless=new")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--window-size=1920,1080")
    chrome_options.add_argument("--disable-extensions")
    if chrome_binary:
        chrome_options.binary_location = chrome_binary

    driver = webdriver.Chrome(options=chrome_options)
    driver.set_page_load_timeout(PAGE_LOAD_TIMEOUT)
    return driver


class BrowserManager:
    """Lifecycle-managed, process-wide WebDriver handle."""

    def __init__(
        self,
        driver_factory: Optional[Callable[[], WebDriver]] = None,
        chrome_binary: Optional[str] = None,
        max_restarts: int = 3,
    ):
        self._driver_factory = driver_factory or partial(create_chrome_driver, chrome_binary)
        self._driver: Optional[WebDriver] = None
        self._lock = asyncio.Lock()
        self._restarts = 0
        self._closed = False
        self.max_restarts = max_restarts

    @property
    def started(self) -> bool:
        return self._driver is not None

    @staticmethod
    def _is_alive(driver: WebDriver) -> bool:
        try:
            driver.window_handles
        except WebDriverException:
            return False
        return True

    @staticmethod
    def _quit(driver: WebDriver) -> None:
        try:
            driver.quit()
        except WebDriverException as e:
            logfire.warn("Browser quit failed: {error}", error=str(e))

    async def _ensure_driver(self) -> WebDriver:
        """Return a live driver, launching or relaunching it as needed."""
        if self._driver is not None:
            if await asyncio.to_thread(self._is_alive, self._driver):
                return self._driver

            if self._restarts >= self.max_restarts:
                raise BrowserUnavailable(
                    f"Browser session died and {self.max_restarts} restarts were already attempted"
                )
            self._restarts += 1
            logfire.warn("Browser session died, restarting (attempt {attempt})", attempt=self._restarts)
            await asyncio.to_thread(self._quit, self._driver)
            self._driver = None

        try:
            self._driver = await asyncio.to_thread(self._driver_factory)
        except WebDriverException as e:
            raise BrowserUnavailable(f"Failed to launch browser: {e}") from e
        logfire.info("Browser launched")
        return self._driver

    @staticmethod
    def _open_tab(driver: WebDriver):
        base_handle = driver.current_window_handle
        driver.switch_to.new_window("tab")
        return base_handle, driver.current_window_handle

    @staticmethod
    def _close_tab(driver: WebDriver, base_handle: str, tab_handle: str) -> None:
        try:
            if tab_handle in driver.window_handles:
                driver.switch_to.window(tab_handle)
                driver.close()
            driver.switch_to.window(base_handle)
        except WebDriverException as e:
            # liveness check on the next acquire decides whether to restart
            logfire.warn("Failed to release browser tab: {error}", error=str(e))

    @asynccontextmanager
    async def page(self, queue_timeout: Optional[float] = None) -> AsyncIterator[WebDriver]:
        """
        Open a fresh tab for one scrape.

        Args:
            queue_timeout: Seconds to wait for the browser while other scrapes hold it

        Yields:
            The shared driver, focused on a new tab that is closed on exit

        Raises:
            BrowserUnavailable: If the manager is closed, the browser cannot be
                (re)started or it stays busy past `queue_timeout`
        """
        if self._closed:
            raise BrowserUnavailable("Browser manager is closed")

        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=queue_timeout)
        except asyncio.TimeoutError:
            raise BrowserUnavailable(f"Browser busy for more than {queue_timeout}s") from None

        try:
            driver = await self._ensure_driver()
            base_handle, tab_handle = await asyncio.to_thread(self._open_tab, driver)
            try:
                yield driver
                self._restarts = 0
            finally:
                await asyncio.to_thread(self._close_tab, driver, base_handle, tab_handle)
        finally:
            self._lock.release()

    async def run(
        self,
        func: Callable[..., T],
        *args: Any,
        timeout: Optional[float] = None,
        queue_timeout: Optional[float] = None,
    ) -> T:
        """
        Run a blocking scrape function as func(driver, *args) in a fresh tab.

        On timeout or cancellation the tab stays open until the worker thread
        returns, so a late WebDriver call never lands on another scrape's tab.
        """
        async with self.page(queue_timeout) as driver:
            worker = asyncio.ensure_future(asyncio.to_thread(func, driver, *args))
            try:
                return await asyncio.wait_for(asyncio.shield(worker), timeout=timeout)
            except BaseException:
                if not worker.done():
                    logfire.warn("Waiting for an interrupted scrape to release its tab")
                    await asyncio.wait({worker})
                raise

    async def close(self) -> None:
        """Quit the browser. Safe to call more than once."""
        self._closed = True
        async with self._lock:
            if self._driver is not None:
                await asyncio.to_thread(self._quit, self._driver)
                self._driver = None
                logfire.info("Browser closed")
