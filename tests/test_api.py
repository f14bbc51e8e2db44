"""Tests for the HTTP surface of the API."""

import random

import pytest
from fastapi.testclient import TestClient

from backend.config import REQUIRED_KEYS, Settings
from backend.main import create_app
from backend.models.schema import ColorPaletteSuggestion, PaletteColor
from backend.services.aggregator import CATEGORY_COMBINED, Aggregator, ProviderSlot
from backend.services.suggestion_extractor import SuggestionExtractor
from fakes import FakeAdapter, FakeAdvisor, make_item


class ExplodingAggregator:
    async def aggregate(self, request):
        raise RuntimeError("upstream meltdown")


@pytest.fixture
def adapter():
    return FakeAdapter("google", [
        make_item("https://img.example.com/1.png", title="Coffee logo"),
        make_item("https://img.example.com/2.png", title="Poster"),
    ])


@pytest.fixture
def client(settings, advisor, adapter):
    aggregator = Aggregator(
        advisor,
        [ProviderSlot("industry_font", adapter, CATEGORY_COMBINED)],
        extractor=SuggestionExtractor(rng=random.Random(0)),
    )
    return TestClient(create_app(settings=settings, aggregator=aggregator, advisor=advisor))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Design API is running"}


def test_root_lists_endpoints(client):
    assert client.get("/").json()["endpoints"]["search"] == "/search?q="


# ============================================================================
# /search
# ============================================================================

@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
def test_search_requires_query(client, advisor, adapter, params):
    response = client.get("/search", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": "Query is required"}
    assert advisor.calls == []
    assert adapter.calls == []


def test_search_returns_camel_case_payload(client):
    response = client.get("/search", params={"q": "coffee logo", "industry": "food"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) >= {
        "images",
        "aiSuggestions",
        "relatedTerms",
        "colorPalette",
        "heading",
        "fontPairings",
        "layoutSuggestions",
    }
    assert body["heading"] == "Bold Modern Branding"
    assert body["colorPalette"][0] == "#FF5733"
    assert body["fontPairings"][0] == {
        "headlineFont": "Montserrat",
        "bodyFont": "Merriweather",
        "style": "modern editorial",
    }

    image = body["images"][0]
    assert image["imageUrl"] == "https://img.example.com/1.png"
    assert image["sourceName"] == "Google Images"
    assert image["category"] == CATEGORY_COMBINED
    assert len(image["dedupKey"]) == 16


def test_search_passes_sort_and_limit(client):
    body = client.get(
        "/search", params={"q": "poster", "sortBy": "relevance", "limit": 1}
    ).json()

    assert [image["title"] for image in body["images"]] == ["Poster"]


def test_search_rejects_out_of_range_limit(client):
    assert client.get("/search", params={"q": "poster", "limit": 0}).status_code == 422


def test_search_failure_returns_500(settings, advisor):
    app = create_app(settings=settings, aggregator=ExplodingAggregator(), advisor=advisor)

    response = TestClient(app).get("/search", params={"q": "coffee logo"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to fetch design resources",
        "details": "upstream meltdown",
    }


# ============================================================================
# AUXILIARY ENDPOINTS
# ============================================================================

def test_color_palette_endpoint(client):
    response = client.get("/color-palette", params={"q": "coffee logo"})

    assert response.status_code == 200
    assert response.json() == ColorPaletteSuggestion(colors=[
        PaletteColor(hex="#FF5733", name="Ember", usage="primary"),
        PaletteColor(hex="#33FF57", name="Mint", usage="accent"),
        PaletteColor(hex="#222222", name="Ink", usage="text"),
    ]).model_dump(by_alias=True)


def test_font_pairings_endpoint(client):
    body = client.get("/font-pairings", params={"q": "coffee logo"}).json()
    assert body["fontPairings"][0]["headlineFont"] == "Montserrat"


def test_layout_suggestions_endpoint(client):
    body = client.get("/layout-suggestions", params={"q": "coffee logo"}).json()
    assert body["layoutSuggestions"][0]["elements"] == ["hero image", "headline", "CTA"]


def test_auxiliary_endpoint_failure_returns_500(settings):
    advisor = FakeAdvisor(fail_structured=True)
    app = create_app(settings=settings, aggregator=ExplodingAggregator(), advisor=advisor)

    response = TestClient(app).get("/font-pairings", params={"q": "coffee logo"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate font pairings"
    assert "no JSON array found" in response.json()["details"]


def test_auxiliary_endpoint_requires_query(client, advisor):
    assert client.get("/color-palette").status_code == 400
    assert advisor.calls == []


# ============================================================================
# STARTUP
# ============================================================================

def _clear_keys(monkeypatch):
    monkeypatch.setattr("backend.config.load_dotenv", lambda *args, **kwargs: False)
    for key in REQUIRED_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_settings_report_missing_keys(monkeypatch):
    _clear_keys(monkeypatch)
    monkeypatch.setenv("SERPAPI_KEY", "present")

    with pytest.raises(RuntimeError) as excinfo:
        Settings.from_env()

    assert str(excinfo.value).startswith("Missing API keys: OPENAI_API_KEY, FREEPIK_API_KEY.")


def test_app_refuses_to_start_without_keys(monkeypatch):
    _clear_keys(monkeypatch)

    with pytest.raises(RuntimeError):
        with TestClient(create_app()):
            pass
