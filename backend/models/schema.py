"""
Pydantic Schemas - All Data Models

Consolidated schema definitions for the design inspiration service.
Uses Pydantic for validation and Instructor for structured LLM outputs.

Schema Categories:
- Request: search request with design filters
- Results: individual image results and the aggregated result
- Response: wire payload returned to the front end
- Structured outputs: models filled by the LLM via Instructor
"""

import hashlib
from typing import Dict, List, Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


SOURCE_NAMES = (
    "Google Images",
    "Pinterest",
    "Freepik",
    "Freepik AI",
    "Dribbble",
    "Designspiration",
    "Muzli",
    "Instagram",
)

DEFAULT_HEADING = "Design Recommendations"


class InvalidSearchRequest(ValueError):
    """Raised when a search request fails validation before any provider call."""


def normalize_image_url(url: str) -> str:
    """Normalize an image URL for identity comparison.

    Scheme and host are lowercased, the fragment is dropped and a trailing
    slash on the path is removed. The query string is kept because CDNs
    often encode the image variant there.
    """
    parts = urlsplit(url.strip())
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), parts.path.rstrip("/"), parts.query, "")
    )


def dedup_key_for(url: str) -> str:
    """Deterministic identity for an image URL."""
    return hashlib.sha1(normalize_image_url(url).encode("utf-8")).hexdigest()[:16]


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# API REQUEST SCHEMAS
# ============================================================================

class SearchRequest(CamelModel):
    """Design search request with optional filters."""

    query: str = Field(..., description="Free-text design query")
    industry: Optional[str] = Field(None, description="Target industry, e.g. 'tech'")
    font: Optional[str] = Field(None, description="Preferred font or font family")
    color: Optional[str] = Field(None, description="Hex code or color name")
    design_style: Optional[str] = Field(None, description="Design style, e.g. 'minimalist'")
    audience: Optional[str] = Field(None, description="Target audience")
    purpose: Optional[str] = Field(None, description="Purpose of the design")
    want_ai_images: bool = Field(False, description="Generate AI images")
    want_platform_results: bool = Field(False, description="Include design platform results")
    sort_by: Optional[str] = Field(None, description="'relevance' or 'source'")
    max_results: Optional[int] = Field(None, ge=1, description="Maximum number of images")

    @field_validator("industry", "font", "color", "design_style", "audience", "purpose", "sort_by")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def validated(self) -> "SearchRequest":
        """Return self if the query is usable, else raise InvalidSearchRequest."""
        if not self.query or not self.query.strip():
            raise InvalidSearchRequest("Query is required")
        return self


# ============================================================================
# RESULT SCHEMAS
# ============================================================================

class ResultItem(CamelModel):
    """Single image result produced by a provider adapter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    image_url: str = Field(..., min_length=1, description="Direct image URL")
    title: str = Field("Design Inspiration", description="Result title")
    source_name: str = Field(..., description="Provider display name")
    origin_url: Optional[str] = Field(None, description="Page the image was found on")
    author: Optional[str] = Field(None, description="Author or contributor")
    format: Optional[str] = Field(None, description="Resource format, e.g. 'vector'")
    is_premium: bool = Field(False, description="Premium marketplace resource")
    category: str = Field("", description="Result category, assigned by the aggregator")

    @field_validator("source_name")
    @classmethod
    def known_source(cls, value: str) -> str:
        if value not in SOURCE_NAMES:
            raise ValueError(f"Unknown source '{value}', expected one of {', '.join(SOURCE_NAMES)}")
        return value

    @computed_field(alias="dedupKey")
    @property
    def dedup_key(self) -> str:
        return dedup_key_for(self.image_url)


class ExtractedSignals(BaseModel):
    """Structured signals pulled out of freeform design suggestions."""

    heading: str = DEFAULT_HEADING
    color_hex_codes: List[str] = Field(default_factory=list)
    style_keywords: List[str] = Field(default_factory=list)
    font_keywords: List[str] = Field(default_factory=list)


class FontPairing(CamelModel):
    """Headline/body font combination."""

    headline_font: str = Field(..., description="Font used for headlines")
    body_font: str = Field(..., description="Font used for body copy")
    style: str = Field(..., description="Mood or context this pairing suits")


class LayoutSuggestion(CamelModel):
    """Layout idea for the requested design."""

    name: str = Field(..., description="Short layout name")
    description: str = Field(..., description="What the layout looks like")
    elements: List[str] = Field(default_factory=list, description="Key layout elements")
    reasoning: str = Field(..., description="Why the layout fits the request")


class AggregationResult(BaseModel):
    """Aggregated result for one search request."""

    model_config = ConfigDict(frozen=True)

    images: List[ResultItem] = Field(default_factory=list)
    ai_suggestions_text: str = ""
    heading: str = DEFAULT_HEADING
    color_palette: List[str] = Field(default_factory=list, max_length=5)
    related_terms: List[str] = Field(default_factory=list, max_length=15)
    font_pairings: Optional[List[FontPairing]] = None
    layout_suggestions: Optional[List[LayoutSuggestion]] = None
    queries: Dict[str, str] = Field(default_factory=dict)


# ============================================================================
# API RESPONSE SCHEMAS
# ============================================================================

class SearchResponse(CamelModel):
    """Wire payload for GET /search."""

    images: List[ResultItem] = Field(default_factory=list)
    ai_suggestions: str = Field("", description="Freeform design recommendations (markdown)")
    related_terms: List[str] = Field(default_factory=list)
    color_palette: List[str] = Field(default_factory=list)
    heading: str = DEFAULT_HEADING
    font_pairings: Optional[List[FontPairing]] = None
    layout_suggestions: Optional[List[LayoutSuggestion]] = None


# ============================================================================
# STRUCTURED OUTPUT SCHEMAS (Instructor)
# ============================================================================

class PaletteColor(CamelModel):
    hex: str = Field(..., pattern=r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$", description="Hex code")
    name: str = Field(..., description="Human-friendly color name")
    usage: str = Field(..., description="Where to use the color")


class ColorPaletteSuggestion(CamelModel):
    """Color palette with 4-6 colors."""

    colors: List[PaletteColor] = Field(..., min_length=3, max_length=6)


class FontPairingSet(CamelModel):
    pairings: List[FontPairing] = Field(..., min_length=1, max_length=5)


class LayoutSuggestionSet(CamelModel):
    layouts: List[LayoutSuggestion] = Field(..., min_length=1, max_length=5)


class DesignTrend(CamelModel):
    name: str
    description: str
    examples: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)


class DesignTrendReport(CamelModel):
    trends: List[DesignTrend] = Field(..., min_length=1)


class ContrastCheck(CamelModel):
    foreground: str
    background: str
    ratio_note: str = Field(..., description="Approximate contrast ratio and WCAG level")
    passes: bool


class AccessibilityReport(CamelModel):
    summary: str
    contrast_checks: List[ContrastCheck] = Field(default_factory=list)
    recommendations: List[str] = Field(..., min_length=1)


class BrandGuidelines(CamelModel):
    brand_voice: str
    logo_usage: List[str] = Field(default_factory=list)
    color_usage: List[str] = Field(default_factory=list)
    typography: List[str] = Field(default_factory=list)
    imagery: List[str] = Field(default_factory=list)


class SocialTrend(CamelModel):
    name: str
    description: str
    hashtags: List[str] = Field(default_factory=list)
    content_ideas: List[str] = Field(default_factory=list)


class SocialTrendReport(CamelModel):
    trends: List[SocialTrend] = Field(..., min_length=1)
