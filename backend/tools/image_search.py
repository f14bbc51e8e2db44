"""
Image Search Adapter - SerpAPI Google Images Integration

Searches Google Images through SerpAPI. The same adapter backs the
platform-restricted searches (Pinterest, Instagram): the query builder adds
the `site:` operator, the adapter only labels the results.

Key Features:
- Bounded page size (SerpAPI quota, ≤10 per call)
- One simplified fallback query when the primary query finds nothing
- Optional HEAD probe to drop dead or non-image URLs
"""

import asyncio
from typing import Any, Dict, List

import httpx

from backend.config import MAX_PAGE_SIZE, PROBE_TIMEOUT, SEARCH_TIMEOUT
from backend.models.schema import ResultItem
from backend.services.query_builder import simplify_query
from backend.tools.base import ProviderAdapter

SERPAPI_URL = "https://serpapi.com/search.json"


async def validate_image_url(client: httpx.AsyncClient, url: str, timeout: float = PROBE_TIMEOUT) -> bool:
    """Check that a URL answers a HEAD request with 200 and an image content type.

    Any probe error counts as invalid.
    """
    try:
        response = await client.head(url, timeout=timeout, follow_redirects=True)
    except Exception:
        return False
    content_type = response.headers.get("content-type", "")
    return response.status_code == 200 and content_type.lower().startswith("image")


async def filter_valid_images(
    client: httpx.AsyncClient, items: List[ResultItem], timeout: float = PROBE_TIMEOUT
) -> List[ResultItem]:
    """Probe all item URLs concurrently and keep the valid ones, in order."""
    checks = await asyncio.gather(
        *(validate_image_url(client, item.image_url, timeout) for item in items)
    )
    return [item for item, ok in zip(items, checks) if ok]


class SerpApiImageSearch(ProviderAdapter):
    """Google Images search via SerpAPI."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        source_name: str = "Google Images",
        validate_images: bool = False,
        timeout: float = SEARCH_TIMEOUT,
    ):
        if not api_key:
            raise RuntimeError("SERPAPI_KEY environment variable is required")
        self.client = client
        self.api_key = api_key
        self.source_name = source_name
        self.name = f"serpapi:{source_name.lower().replace(' ', '_')}"
        self.validate_images = validate_images
        # primary + fallback search, then the probes
        self.timeout = 2 * timeout + (PROBE_TIMEOUT if validate_images else 0)
        self.search_timeout = timeout

    async def _fetch(self, query: str, limit: int, **options: Any) -> List[ResultItem]:
        limit = min(limit, MAX_PAGE_SIZE)

        items = await self._search(query, limit)
        if not items:
            fallback = simplify_query(query)
            if fallback and fallback != query:
                items = await self._search(fallback, limit)

        if items and self.validate_images:
            items = await filter_valid_images(self.client, items)
        return items

    async def _search(self, query: str, limit: int) -> List[ResultItem]:
        """Execute one SerpAPI image search."""
        params = {
            "q": query,
            "tbm": "isch",
            "api_key": self.api_key,
            "ijn": "0",
            "safe": "active",
        }
        response = await self.client.get(SERPAPI_URL, params=params, timeout=self.search_timeout)
        response.raise_for_status()
        data = response.json()

        return [
            item
            for item in (self._to_item(raw) for raw in data.get("images_results", [])[:limit])
            if item is not None
        ]

    def _to_item(self, raw: Dict[str, Any]):
        image_url = raw.get("original") or raw.get("thumbnail")
        if not image_url:
            return None
        return ResultItem(
            image_url=image_url,
            title=raw.get("title") or "Design Inspiration",
            source_name=self.source_name,
            origin_url=raw.get("link") or raw.get("source") or None,
        )
