"""
Site Scrapers - Design platform search pages via headless Chrome

Dribbble, Designspiration and Muzli have no public search API, so their
search result pages are rendered in the shared browser and the result cards
are read with CSS selectors. Each site is a declarative SiteProfile; one
SiteScraper adapter class handles all of them.
"""

from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import quote, quote_plus

import logfire
from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from backend.config import RENDER_WAIT_SECONDS, SCRAPE_QUEUE_TIMEOUT, SCRAPE_TIMEOUT
from backend.models.schema import ResultItem
from backend.tools.base import ProviderAdapter
from backend.tools.browser import BrowserManager


@dataclass(frozen=True)
class SiteProfile:
    """Where a site's search page lives and how to read its result cards."""

    name: str
    source_name: str
    search_url: str  # contains a {query} placeholder
    card_selector: str
    image_selector: str = "img"
    link_selector: Optional[str] = "a"
    author_selector: Optional[str] = None
    query_in_path: bool = False
    default_title: str = "Design Inspiration"

    def url_for(self, query: str) -> str:
        encoded = quote(query.replace(" ", "-")) if self.query_in_path else quote_plus(query)
        return self.search_url.format(query=encoded)


DRIBBBLE = SiteProfile(
    name="dribbble",
    source_name="Dribbble",
    search_url="https://dribbble.com/search/{query}",
    card_selector="li.shot-thumbnail",
    image_selector="figure img",
    link_selector="a.shot-thumbnail-link",
    author_selector=".display-name",
    query_in_path=True,
)

DESIGNSPIRATION = SiteProfile(
    name="designspiration",
    source_name="Designspiration",
    search_url="https://www.designspiration.com/search/saves/?q={query}",
    card_selector="div.gridItem",
)

MUZLI = SiteProfile(
    name="muzli",
    source_name="Muzli",
    search_url="https://search.muz.li/search/{query}",
    card_selector="div.masonry-item, div.item",
    query_in_path=True,
)

SITE_PROFILES = (DRIBBBLE, DESIGNSPIRATION, MUZLI)


def _first(element: WebElement, selector: Optional[str]) -> Optional[WebElement]:
    if not selector:
        return None
    try:
        return element.find_element(By.CSS_SELECTOR, selector)
    except NoSuchElementException:
        return None


def _image_source(img: WebElement) -> Optional[str]:
    """Resolve the real image URL, preferring lazy-load attributes."""
    for attribute in ("data-src", "src"):
        value = img.get_attribute(attribute)
        if value and value.startswith("http"):
            return value
    srcset = img.get_attribute("srcset") or ""
    first = srcset.split(",")[0].strip().split(" ")[0]
    return first if first.startswith("http") else None


class SiteScraper(ProviderAdapter):
    """Scrape one design platform's search results page."""

    def __init__(
        self,
        profile: SiteProfile,
        browser: BrowserManager,
        render_timeout: float = RENDER_WAIT_SECONDS,
        timeout: float = SCRAPE_TIMEOUT,
        queue_timeout: float = SCRAPE_QUEUE_TIMEOUT,
    ):
        self.profile = profile
        self.browser = browser
        self.name = f"scraper:{profile.name}"
        self.source_name = profile.source_name
        self.render_timeout = render_timeout
        # waiting for the browser and the scrape itself are budgeted separately
        self.scrape_timeout = timeout
        self.queue_timeout = queue_timeout
        self.timeout = queue_timeout + timeout

    async def _fetch(self, query: str, limit: int, **options: Any) -> List[ResultItem]:
        url = self.profile.url_for(query)
        return await self.browser.run(
            self._scrape, url, limit, timeout=self.scrape_timeout, queue_timeout=self.queue_timeout
        )

    def _scrape(self, driver: WebDriver, url: str, limit: int) -> List[ResultItem]:
        driver.get(url)
        try:
            WebDriverWait(driver, self.render_timeout).until(
                EC.presence_of_all_elements_located((By.CSS_SELECTOR, self.profile.card_selector))
            )
        except TimeoutException:
            logfire.warn("{provider}: no result cards rendered at {url}", provider=self.name, url=url)
            return []

        results = []
        for card in driver.find_elements(By.CSS_SELECTOR, self.profile.card_selector):
            if len(results) >= limit:
                break
            item = self._extract_card(card)
            if item is not None:
                results.append(item)
        return results

    def _extract_card(self, card: WebElement) -> Optional[ResultItem]:
        img = _first(card, self.profile.image_selector)
        image_url = _image_source(img) if img is not None else None
        if not image_url:
            return None

        link = _first(card, self.profile.link_selector)
        author = _first(card, self.profile.author_selector)
        title = (img.get_attribute("alt") or "").strip()
        author_name = author.text.strip() if author is not None else ""

        return ResultItem(
            image_url=image_url,
            title=title or self.profile.default_title,
            source_name=self.source_name,
            origin_url=link.get_attribute("href") if link is not None else None,
            author=author_name or None,
        )
