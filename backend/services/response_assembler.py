"""
Response Assembler - Wire payload for GET /search

Pure mapping from the internal AggregationResult to the SearchResponse
contract. No network calls, no randomness.
"""

from backend.models.schema import AggregationResult, SearchResponse


def assemble_response(result: AggregationResult) -> SearchResponse:
    """Shape an aggregation result into the client payload."""
    return SearchResponse(
        images=list(result.images),
        ai_suggestions=result.ai_suggestions_text,
        related_terms=list(result.related_terms),
        color_palette=list(result.color_palette),
        heading=result.heading,
        font_pairings=list(result.font_pairings) if result.font_pairings is not None else None,
        layout_suggestions=(
            list(result.layout_suggestions) if result.layout_suggestions is not None else None
        ),
    )
