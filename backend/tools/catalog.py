"""
Provider Catalog - The registered provider slots, in priority order

Slot order is the canonical concatenation order used by the aggregator:
platform/social results, then generic image search, then the resource
marketplace, then AI-generated images. Because deduplication keeps the
first occurrence, earlier slots win ties.
"""

import random
from typing import List, Optional

import httpx

from backend.config import Settings
from backend.services.aggregator import (
    CATEGORY_AI,
    CATEGORY_COLOR,
    CATEGORY_COMBINED,
    CATEGORY_PLATFORM,
    CATEGORY_PSD,
    CATEGORY_RESOURCES,
    CATEGORY_VECTOR,
    GATE_AI,
    GATE_PLATFORMS,
    ProviderSlot,
)
from backend.tools.browser import BrowserManager
from backend.tools.freepik import FreepikAIImageGenerator, FreepikResourceSearch
from backend.tools.image_search import SerpApiImageSearch
from backend.tools.site_scrapers import SITE_PROFILES, SiteScraper


def build_provider_slots(
    settings: Settings,
    client: httpx.AsyncClient,
    browser: Optional[BrowserManager] = None,
    rng: Optional[random.Random] = None,
) -> List[ProviderSlot]:
    """
    Build the default slot list.

    Args:
        settings: Credentials and feature flags
        client: Shared HTTP client for API-based adapters
        browser: Shared browser; scraper slots are skipped without one
        rng: Random source for AI image seeds

    Returns:
        Provider slots in concatenation priority order
    """
    google = SerpApiImageSearch(
        client, settings.serpapi_key, "Google Images", validate_images=settings.validate_image_urls
    )
    pinterest = SerpApiImageSearch(client, settings.serpapi_key, "Pinterest")
    instagram = SerpApiImageSearch(client, settings.serpapi_key, "Instagram")
    resources = FreepikResourceSearch(client, settings.freepik_api_key)
    ai_images = FreepikAIImageGenerator(client, settings.freepik_api_key, rng=rng)

    slots = [
        ProviderSlot("pinterest", pinterest, CATEGORY_PLATFORM, limit=8, gate=GATE_PLATFORMS),
        ProviderSlot("instagram", instagram, CATEGORY_PLATFORM, limit=6, gate=GATE_PLATFORMS),
    ]
    if browser is not None and settings.enable_scrapers:
        slots.extend(
            ProviderSlot(profile.name, SiteScraper(profile, browser), CATEGORY_PLATFORM, limit=8, gate=GATE_PLATFORMS)
            for profile in SITE_PROFILES
        )

    slots.extend([
        ProviderSlot("industry_font", google, CATEGORY_COMBINED, limit=10),
        ProviderSlot("color_style", google, CATEGORY_COMBINED, limit=10),
        ProviderSlot("resources_main", resources, CATEGORY_RESOURCES, limit=10),
        ProviderSlot("resources_color", resources, CATEGORY_COLOR, limit=10),
        ProviderSlot(
            "resources_vector", resources, CATEGORY_VECTOR,
            limit=8, options={"format": "vector"}, format_override="vector",
        ),
        ProviderSlot(
            "resources_psd", resources, CATEGORY_PSD,
            limit=8, options={"format": "psd"}, format_override="psd",
        ),
        ProviderSlot("ai_image", ai_images, CATEGORY_AI, format_override="AI Image", gate=GATE_AI),
    ])
    return slots
