"""
Related Terms - Query expansion for follow-up searches

Tokenizes and stems the query with NLTK, then expands each stem with design
synonyms and industry-specific vocabulary. Only the tokenizer and the Porter
stemmer are used, so no NLTK corpora need to be downloaded.
"""

from typing import Dict, List, Optional

from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

MAX_RELATED_TERMS = 15

SYNONYM_MAPPINGS: Dict[str, List[str]] = {
    "design": ["creative", "visual", "artistic", "graphic", "conceptual"],
    "brand": ["identity", "branding", "corporate", "image"],
    "style": ["aesthetic", "look", "theme", "feel", "approach"],
    "logo": ["emblem", "mark", "insignia", "symbol"],
    "color": ["palette", "scheme", "tone", "hue", "shade"],
}

INDUSTRY_EXPANSIONS: Dict[str, List[str]] = {
    "tech": ["digital", "interface", "ui", "ux", "app", "software", "innovation"],
    "fashion": ["clothing", "apparel", "trend", "style", "couture", "runway"],
    "food": ["culinary", "restaurant", "menu", "cuisine", "gourmet", "branding"],
    "education": ["learning", "academic", "training", "course", "instructional"],
}

_tokenizer = RegexpTokenizer(r"\w+")
_stemmer = PorterStemmer()


def extract_related_terms(
    query: str,
    industry: Optional[str] = None,
    design_style: Optional[str] = None,
) -> List[str]:
    """
    Expand a design query into related search terms.

    Args:
        query: Raw user query
        industry: Optional industry filter
        design_style: Optional design style filter

    Returns:
        Up to 15 unique terms in generation order
    """
    tokens = _tokenizer.tokenize((query or "").lower())
    stems = [_stemmer.stem(token) for token in tokens]
    industry_terms = INDUSTRY_EXPANSIONS.get(industry.lower(), []) if industry else []

    terms: Dict[str, None] = {}
    for stem in stems:
        terms[f"{stem} design"] = None
        for key, synonyms in SYNONYM_MAPPINGS.items():
            if key in stem:
                for synonym in synonyms:
                    terms[f"{synonym} design"] = None
        for term in industry_terms:
            terms[f"{stem} {term}"] = None

    if design_style:
        terms[f"{design_style} design"] = None
    if industry:
        terms[f"{industry} design"] = None

    return list(terms)[:MAX_RELATED_TERMS]
