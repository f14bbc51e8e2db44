"""Tests for related search term expansion."""

from backend.services.related_terms import MAX_RELATED_TERMS, extract_related_terms


def test_query_token_comes_first_followed_by_synonyms():
    terms = extract_related_terms("logo")

    assert terms[0] == "logo design"
    assert terms[1:5] == ["emblem design", "mark design", "insignia design", "symbol design"]


def test_industry_and_style_terms_are_added():
    terms = extract_related_terms("logo", industry="food", design_style="retro")

    assert "logo culinary" in terms
    assert "logo restaurant" in terms
    assert terms[-2:] == ["retro design", "food design"]


def test_unknown_industry_only_adds_its_own_term():
    terms = extract_related_terms("logo", industry="mining")
    assert terms[-1] == "mining design"
    assert not any(term.startswith("logo mining") for term in terms)


def test_terms_are_unique_and_capped():
    terms = extract_related_terms("brand design style color logo", industry="tech", design_style="flat")

    assert len(terms) == MAX_RELATED_TERMS
    assert len(set(terms)) == len(terms)


def test_empty_query_without_filters_has_no_terms():
    assert extract_related_terms("") == []
