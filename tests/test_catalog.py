"""Tests for the default provider slot registry."""

import httpx

from backend.services.aggregator import (
    CATEGORY_AI,
    CATEGORY_PLATFORM,
    CATEGORY_PSD,
    CATEGORY_VECTOR,
    GATE_AI,
    GATE_PLATFORMS,
)
from backend.tools.browser import BrowserManager
from backend.tools.catalog import build_provider_slots
from backend.tools.site_scrapers import SiteScraper


def test_slots_in_priority_order_without_browser(settings):
    slots = build_provider_slots(settings, httpx.AsyncClient())

    assert [slot.key for slot in slots] == [
        "pinterest",
        "instagram",
        "industry_font",
        "color_style",
        "resources_main",
        "resources_color",
        "resources_vector",
        "resources_psd",
        "ai_image",
    ]


def test_slot_categories_gates_and_overrides(settings):
    slots = {slot.key: slot for slot in build_provider_slots(settings, httpx.AsyncClient())}

    assert slots["pinterest"].category == CATEGORY_PLATFORM
    assert slots["pinterest"].gate == GATE_PLATFORMS
    assert slots["pinterest"].adapter.source_name == "Pinterest"
    assert slots["resources_vector"].category == CATEGORY_VECTOR
    assert slots["resources_vector"].options == {"format": "vector"}
    assert slots["resources_psd"].category == CATEGORY_PSD
    assert slots["resources_psd"].format_override == "psd"
    assert slots["ai_image"].category == CATEGORY_AI
    assert slots["ai_image"].gate == GATE_AI
    assert slots["industry_font"].adapter is slots["color_style"].adapter


def test_scraper_slots_follow_social_searches(settings):
    settings = settings.model_copy(update={"enable_scrapers": True})
    slots = build_provider_slots(settings, httpx.AsyncClient(), browser=BrowserManager(driver_factory=object))

    keys = [slot.key for slot in slots]
    assert keys[:5] == ["pinterest", "instagram", "dribbble", "designspiration", "muzli"]
    assert all(isinstance(slot.adapter, SiteScraper) for slot in slots[2:5])
    assert all(slot.gate == GATE_PLATFORMS for slot in slots[2:5])
