"""
Query Builder - Provider-specific search strings

Turns a SearchRequest (plus any signals extracted from the AI suggestions)
into one query string per provider slot. Pure and deterministic: the same
inputs always produce the same queries, and no network calls are made.
"""

from typing import Dict, Optional, Sequence

from backend.models.schema import ExtractedSignals, SearchRequest


def join_terms(*parts: Optional[str]) -> str:
    """Join non-empty parts with single spaces, skipping None and blanks."""
    words = []
    for part in parts:
        if part is None:
            continue
        words.extend(str(part).split())
    return " ".join(words)


def simplify_query(query: str) -> str:
    """Fallback query: first three words plus 'design', keeping any site: operators."""
    tokens = query.split()
    operators = [token for token in tokens if token.lower().startswith("site:")]
    words = [token for token in tokens if token not in operators]
    return join_terms(*words[:3], "design", *operators)


class QueryBuilder:
    """Builds the query string for every provider slot."""

    def build(
        self,
        request: SearchRequest,
        signals: Optional[ExtractedSignals] = None,
        palette: Optional[Sequence[str]] = None,
    ) -> Dict[str, str]:
        """
        Build one query per slot key.

        Args:
            request: Validated search request
            signals: Signals extracted from the AI suggestions, if any
            palette: Color palette derived from the AI suggestions, if any

        Returns:
            Mapping of slot key to query string
        """
        q = request.query.strip()
        style = request.design_style
        if not style and signals and signals.style_keywords:
            style = signals.style_keywords[0]
        font = request.font
        if not font and signals and signals.font_keywords:
            font = signals.font_keywords[0]

        lead_color = palette[0] if palette else request.color
        audience = f"for {request.audience}" if request.audience else None

        return {
            # platform / social
            "pinterest": join_terms(
                q, request.industry, style, "design inspiration", "site:pinterest.com"
            ),
            "instagram": join_terms(q, style, "design", "site:instagram.com"),
            "dribbble": join_terms(q, style),
            "designspiration": join_terms(q, style),
            "muzli": join_terms(q, style),
            # generic image search
            "industry_font": join_terms(q, request.industry, font, "design inspiration"),
            "color_style": join_terms(q, style, request.color, "design inspiration"),
            # resource marketplace
            "resources_main": join_terms(q, request.industry, style),
            "resources_color": join_terms(q, lead_color),
            "resources_vector": join_terms(q, style, "vector"),
            "resources_psd": join_terms(q, request.industry, "template"),
            # generated
            "ai_image": join_terms(q, style, request.industry, "design", audience),
        }
