"""
Design Advisor Service - Generative design recommendations

Talks to OpenAI's chat API in two modes:
- Freeform markdown design suggestions (heading, palette, typography, ...)
  that feed the suggestion extractor and are returned to the client as-is
- Structured outputs using Instructor + Pydantic for font pairings,
  layouts, palettes, trends, accessibility and brand guidelines

The freeform call fails soft with a fixed fallback sentence so the search
pipeline can continue. Structured calls raise; callers decide whether to
default or surface the error.
"""

from typing import List, Optional, Sequence, Type, TypeVar

import instructor
import logfire
from openai import AsyncOpenAI
from pydantic import BaseModel

from backend.config import GENERATION_TIMEOUT, LLM_MODEL
from backend.models.schema import (
    AccessibilityReport,
    BrandGuidelines,
    ColorPaletteSuggestion,
    DesignTrendReport,
    FontPairing,
    FontPairingSet,
    LayoutSuggestion,
    LayoutSuggestionSet,
    SearchRequest,
    SocialTrendReport,
)
from backend.prompts import (
    ACCESSIBILITY_TEMPLATE,
    BRAND_GUIDELINES_TEMPLATE,
    COLOR_PALETTE_TEMPLATE,
    DESIGN_CONSULTANT_SYSTEM_PROMPT,
    DESIGN_SUGGESTIONS_TEMPLATE,
    DESIGN_TRENDS_TEMPLATE,
    FONT_PAIRINGS_TEMPLATE,
    INSTAGRAM_TRENDS_TEMPLATE,
    LAYOUT_SUGGESTIONS_TEMPLATE,
)

FALLBACK_SUGGESTIONS = "Could not generate AI suggestions."
NOT_SPECIFIED = "Not specified"

T = TypeVar("T", bound=BaseModel)


def format_brief(request: SearchRequest) -> str:
    """Render the request filters as a short brief for structured prompts."""
    lines = [f"Query: {request.query.strip()}"]
    for label, value in (
        ("Industry", request.industry),
        ("Font", request.font),
        ("Color", request.color),
        ("Design style", request.design_style),
        ("Audience", request.audience),
        ("Purpose", request.purpose),
    ):
        if value:
            lines.append(f"{label}: {value}")
    return "\n".join(lines)


class DesignAdvisorService:
    """Service for generating design recommendations with GPT-4o-mini."""

    def __init__(self, api_key: str, model: str = LLM_MODEL, client: Optional[AsyncOpenAI] = None):
        if not api_key and client is None:
            raise RuntimeError("OPENAI_API_KEY environment variable is required")

        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key, timeout=GENERATION_TIMEOUT)
        self.instructor_client = instructor.from_openai(self.client)

    async def design_suggestions(self, request: SearchRequest) -> str:
        """
        Generate freeform markdown design recommendations.

        Args:
            request: Search request with optional filters

        Returns:
            Markdown text, or a fallback sentence if generation fails
        """
        prompt = DESIGN_SUGGESTIONS_TEMPLATE.format(
            query=request.query.strip(),
            industry=request.industry or NOT_SPECIFIED,
            font=request.font or NOT_SPECIFIED,
            color=request.color or NOT_SPECIFIED,
            design_style=request.design_style or NOT_SPECIFIED,
            audience=request.audience or NOT_SPECIFIED,
            purpose=request.purpose or NOT_SPECIFIED,
            industry_label=request.industry or "this industry",
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": DESIGN_CONSULTANT_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.7,
            )
            text = completion.choices[0].message.content if completion.choices else None
        except Exception as e:
            logfire.error("Design suggestion generation failed: {error}", error=str(e))
            return FALLBACK_SUGGESTIONS

        return text.strip() if text and text.strip() else FALLBACK_SUGGESTIONS

    async def _structured(self, response_model: Type[T], prompt: str) -> T:
        return await self.instructor_client.chat.completions.create(
            model=self.model,
            response_model=response_model,
            messages=[
                {"role": "system", "content": DESIGN_CONSULTANT_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.7,
            max_retries=1,
        )

    async def font_pairings(self, request: SearchRequest) -> List[FontPairing]:
        result = await self._structured(
            FontPairingSet, FONT_PAIRINGS_TEMPLATE.format(brief=format_brief(request))
        )
        return result.pairings

    async def layout_suggestions(self, request: SearchRequest) -> List[LayoutSuggestion]:
        result = await self._structured(
            LayoutSuggestionSet, LAYOUT_SUGGESTIONS_TEMPLATE.format(brief=format_brief(request))
        )
        return result.layouts

    async def color_palette(self, request: SearchRequest) -> ColorPaletteSuggestion:
        return await self._structured(
            ColorPaletteSuggestion, COLOR_PALETTE_TEMPLATE.format(brief=format_brief(request))
        )

    async def design_trends(self, request: SearchRequest) -> DesignTrendReport:
        return await self._structured(
            DesignTrendReport, DESIGN_TRENDS_TEMPLATE.format(brief=format_brief(request))
        )

    async def accessibility_recommendations(
        self, request: SearchRequest, colors: Sequence[str] = ()
    ) -> AccessibilityReport:
        return await self._structured(
            AccessibilityReport,
            ACCESSIBILITY_TEMPLATE.format(
                brief=format_brief(request),
                colors=", ".join(colors) if colors else NOT_SPECIFIED,
            ),
        )

    async def brand_guidelines(self, request: SearchRequest) -> BrandGuidelines:
        return await self._structured(
            BrandGuidelines, BRAND_GUIDELINES_TEMPLATE.format(brief=format_brief(request))
        )

    async def instagram_trends(self, request: SearchRequest) -> SocialTrendReport:
        return await self._structured(
            SocialTrendReport, INSTAGRAM_TRENDS_TEMPLATE.format(brief=format_brief(request))
        )
