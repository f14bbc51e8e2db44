"""
Freepik Adapters - Resource marketplace and AI image generation

FreepikResourceSearch queries the Freepik resources API, optionally filtered
to vector or PSD resources. FreepikAIImageGenerator submits a text-to-image
request with a random seed so repeated searches produce different images.
"""

import random
from typing import Any, Dict, List, Optional

import httpx

from backend.config import GENERATION_TIMEOUT, MAX_PAGE_SIZE, RESOURCE_FORMATS, SEARCH_TIMEOUT
from backend.models.schema import ResultItem
from backend.tools.base import ProviderAdapter

FREEPIK_RESOURCES_URL = "https://api.freepik.com/v1/resources"
FREEPIK_TEXT_TO_IMAGE_URL = "https://api.freepik.com/v1/ai/text-to-image"

MAX_SEED = 1_000_000


def normalize_format(format: Optional[str]) -> Optional[str]:
    """Return the lowercased format if it is a supported filter, else None."""
    if not format:
        return None
    format = format.strip().lower()
    return format if format in RESOURCE_FORMATS else None


class FreepikResourceSearch(ProviderAdapter):
    """Search downloadable design resources on Freepik."""

    name = "freepik:resources"
    source_name = "Freepik"

    def __init__(self, client: httpx.AsyncClient, api_key: str, timeout: float = SEARCH_TIMEOUT):
        if not api_key:
            raise RuntimeError("FREEPIK_API_KEY environment variable is required")
        self.client = client
        self.api_key = api_key
        self.timeout = timeout

    async def _fetch(self, query: str, limit: int, **options: Any) -> List[ResultItem]:
        params = {
            "term": query,
            "locale": "en-US",
            "page": 1,
            "limit": min(limit, MAX_PAGE_SIZE),
            "order": "relevance",
        }
        format = normalize_format(options.get("format"))
        if format:
            params["format"] = format

        response = await self.client.get(
            FREEPIK_RESOURCES_URL,
            params=params,
            headers={"x-freepik-api-key": self.api_key},
        )
        response.raise_for_status()
        data = response.json()

        results = []
        for raw in data.get("data") or []:
            item = self._to_item(raw, format)
            if item is not None:
                results.append(item)
        return results

    def _to_item(self, raw: Dict[str, Any], format: Optional[str]) -> Optional[ResultItem]:
        image = raw.get("image") or {}
        image_url = (image.get("source") or {}).get("url") or image.get("regular_url")
        if not image_url:
            return None
        return ResultItem(
            image_url=image_url,
            title=raw.get("title") or "Design Resource",
            source_name=self.source_name,
            origin_url=raw.get("url") or None,
            author=(raw.get("contributor") or {}).get("username") or "Freepik Artist",
            format=raw.get("format") or format or "image",
            is_premium=bool(raw.get("is_premium", False)),
        )


class FreepikAIImageGenerator(ProviderAdapter):
    """Generate images from a text prompt with Freepik's text-to-image API."""

    name = "freepik:ai"
    source_name = "Freepik AI"
    default_limit = 4

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        rng: Optional[random.Random] = None,
        aspect_ratio: str = "square_1_1",
        color: str = "softhue",
        camera: str = "portrait",
        lighting: str = "iridescent",
        timeout: float = GENERATION_TIMEOUT,
    ):
        if not api_key:
            raise RuntimeError("FREEPIK_API_KEY environment variable is required")
        self.client = client
        self.api_key = api_key
        self.rng = rng or random.Random()
        self.aspect_ratio = aspect_ratio
        self.effects = {"color": color, "camera": camera, "lightning": lighting}
        self.timeout = timeout

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "prompt": prompt,
            "aspect_ratio": self.aspect_ratio,
            "styling": {"effects": dict(self.effects)},
            "seed": self.rng.randrange(MAX_SEED),
        }

    async def _fetch(self, query: str, limit: int, **options: Any) -> List[ResultItem]:
        response = await self.client.post(
            FREEPIK_TEXT_TO_IMAGE_URL,
            json=self.build_payload(query),
            headers={"x-freepik-api-key": self.api_key, "Content-Type": "application/json"},
        )
        response.raise_for_status()
        data = response.json()

        images = data.get("images")
        if not isinstance(images, list):
            raise ValueError(f"Unexpected response format from Freepik AI: {sorted(data)}")

        return [
            ResultItem(
                image_url=image["url"],
                title="AI Generated Design",
                source_name=self.source_name,
                format="AI Image",
            )
            for image in images
            if isinstance(image, dict) and image.get("url")
        ]
