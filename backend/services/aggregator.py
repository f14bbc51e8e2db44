"""
Aggregator - Parallel design search across all providers

Coordinates one search request end to end: AI suggestions first (they shape
the queries), then a concurrent fan-out to every enabled provider slot,
then categorisation, deduplication and optional sorting/truncation.

Key Features:
- Declarative slot list: any set of ProviderAdapters can be registered
- Settle-all join: a failing provider contributes nothing but never aborts
  the batch
- Order-sensitive dedup by image identity (first occurrence wins), so slot
  order doubles as source priority
"""

import asyncio
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Sequence

import logfire

from backend.models.schema import AggregationResult, ResultItem, SearchRequest
from backend.services.query_builder import QueryBuilder
from backend.services.related_terms import extract_related_terms
from backend.services.suggestion_extractor import SuggestionExtractor
from backend.tools.base import ProviderAdapter

# Categories (fixed per slot, used by the client for grouping)
CATEGORY_PLATFORM = "Platform Inspiration"
CATEGORY_COMBINED = "Combined Inspiration"
CATEGORY_RESOURCES = "Downloadable Design Resources"
CATEGORY_COLOR = "Downloadable Color Inspiration"
CATEGORY_VECTOR = "Downloadable Vector Resources"
CATEGORY_PSD = "Downloadable PSD Templates"
CATEGORY_AI = "AI Generated Designs"

# Slot gates
GATE_ALWAYS = "always"
GATE_AI = "ai"
GATE_PLATFORMS = "platforms"

SORT_RELEVANCE = "relevance"
SORT_SOURCE = "source"

SOURCE_PRIORITY = (
    "Pinterest",
    "Instagram",
    "Dribbble",
    "Designspiration",
    "Muzli",
    "Google Images",
    "Freepik",
    "Freepik AI",
)

_TOKEN_RE = re.compile(r"\w+")


@dataclass(frozen=True)
class ProviderSlot:
    """One registered provider call: adapter, query slot, category and options."""

    key: str
    adapter: ProviderAdapter
    category: str
    limit: Optional[int] = None
    options: Mapping[str, Any] = field(default_factory=dict)
    format_override: Optional[str] = None
    gate: str = GATE_ALWAYS

    def enabled_for(self, request: SearchRequest) -> bool:
        if self.gate == GATE_AI:
            return request.want_ai_images
        if self.gate == GATE_PLATFORMS:
            return request.want_platform_results
        return True

    def tag(self, items: Sequence[ResultItem]) -> List[ResultItem]:
        """Stamp this slot's category (and format override) on its items."""
        update: Dict[str, Any] = {"category": self.category}
        if self.format_override:
            update["format"] = self.format_override
        return [item.model_copy(update=update) for item in items]


def deduplicate(items: Sequence[ResultItem]) -> List[ResultItem]:
    """Remove duplicate results based on dedup key - keeps first occurrence."""
    seen_keys = set()
    deduplicated = []

    for item in items:
        if item.dedup_key not in seen_keys:
            seen_keys.add(item.dedup_key)
            deduplicated.append(item)

    return deduplicated


def _tokens(text: str) -> set:
    return set(_TOKEN_RE.findall((text or "").lower()))


def sort_items(items: Sequence[ResultItem], sort_by: Optional[str], query: str) -> List[ResultItem]:
    """
    Order results by relevance or source priority.

    Both orderings are stable; an unknown or missing sort_by keeps the
    insertion order.
    """
    if sort_by == SORT_RELEVANCE:
        query_tokens = _tokens(query)
        return sorted(items, key=lambda item: -len(query_tokens & _tokens(item.title)))

    if sort_by == SORT_SOURCE:
        rank = {name: index for index, name in enumerate(SOURCE_PRIORITY)}
        return sorted(items, key=lambda item: rank.get(item.source_name, len(rank)))

    if sort_by:
        logfire.warn("Unknown sortBy {sort_by}, keeping provider order", sort_by=sort_by)
    return list(items)


class Aggregator:
    """Fans a search request out to all provider slots and merges the results."""

    def __init__(
        self,
        advisor,
        slots: Sequence[ProviderSlot],
        query_builder: Optional[QueryBuilder] = None,
        extractor: Optional[SuggestionExtractor] = None,
        max_results: Optional[int] = None,
        include_structured_extras: bool = True,
    ):
        self.advisor = advisor
        self.slots = list(slots)
        self.query_builder = query_builder or QueryBuilder()
        self.extractor = extractor or SuggestionExtractor()
        self.max_results = max_results
        self.include_structured_extras = include_structured_extras

    async def _optional(self, label: str, call: Awaitable[List[Any]]) -> List[Any]:
        """Await a structured extra, defaulting to an empty list on failure."""
        try:
            return await call
        except Exception as e:
            logfire.warn("{label} generation failed: {error}", label=label, error=repr(e))
            return []

    async def aggregate(self, request: SearchRequest) -> AggregationResult:
        """
        Run the full aggregation pipeline for one request.

        Args:
            request: Search request; the query must be non-empty

        Returns:
            AggregationResult with deduplicated, categorised images

        Raises:
            InvalidSearchRequest: If the query is empty or whitespace
        """
        request = request.validated()

        with logfire.span("aggregate design search {query}", query=request.query):
            suggestions = await self.advisor.design_suggestions(request)
            signals = self.extractor.extract(suggestions)
            palette = self.extractor.build_color_palette(suggestions, request.color)
            queries = self.query_builder.build(request, signals, palette)

            active = [slot for slot in self.slots if slot.enabled_for(request)]
            slot_calls = [
                slot.adapter.fetch(queries.get(slot.key, request.query), slot.limit, **slot.options)
                for slot in active
            ]
            extra_calls = []
            if self.include_structured_extras:
                extra_calls = [
                    self._optional("Font pairings", self.advisor.font_pairings(request)),
                    self._optional("Layout suggestions", self.advisor.layout_suggestions(request)),
                ]

            outcomes = await asyncio.gather(*slot_calls, *extra_calls, return_exceptions=True)
            slot_outcomes = outcomes[: len(active)]
            extra_outcomes = outcomes[len(active):]

            combined: List[ResultItem] = []
            for slot, outcome in zip(active, slot_outcomes):
                if isinstance(outcome, BaseException):
                    logfire.error(
                        "Slot {slot} raised despite soft-fail contract: {error}",
                        slot=slot.key,
                        error=repr(outcome),
                    )
                    continue
                combined.extend(slot.tag(outcome))

            images = deduplicate(combined)
            images = sort_items(images, request.sort_by, request.query)
            limit = request.max_results or self.max_results
            if limit:
                images = images[:limit]

            logfire.info(
                "Aggregated {count} images from {slots} slots ({raw} before dedup)",
                count=len(images),
                slots=len(active),
                raw=len(combined),
            )

            font_pairings = layout_suggestions = None
            if extra_outcomes:
                font_pairings, layout_suggestions = (
                    outcome if not isinstance(outcome, BaseException) else []
                    for outcome in extra_outcomes
                )

            return AggregationResult(
                images=images,
                ai_suggestions_text=suggestions,
                heading=signals.heading,
                color_palette=palette,
                related_terms=extract_related_terms(
                    request.query, request.industry, request.design_style
                ),
                font_pairings=font_pairings,
                layout_suggestions=layout_suggestions,
                queries=queries,
            )
