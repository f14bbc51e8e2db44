"""Tests for heading, color and keyword extraction from AI suggestions."""

import random

import pytest

from backend.models.schema import DEFAULT_HEADING
from backend.services.suggestion_extractor import (
    SuggestionExtractor,
    analogous_colors,
    extract_heading,
    extract_hex_colors,
    resolve_color,
    rotate_hue,
)
from fakes import SAMPLE_SUGGESTIONS


# ============================================================================
# HEADING
# ============================================================================

def test_heading_from_markdown_title():
    assert extract_heading("# Bold Modern Branding\n## COLOR PALETTE...") == "Bold Modern Branding"


def test_heading_from_second_level_marker():
    assert extract_heading("## Calm Wellness Identity\nMore text") == "Calm Wellness Identity"


def test_heading_without_marker_or_newline_is_trimmed_text():
    assert extract_heading("   Just a single line of advice  ") == "Just a single line of advice"


def test_heading_without_marker_uses_first_line():
    assert extract_heading("\nWarm and friendly\nUse rounded shapes") == "Warm and friendly"


@pytest.mark.parametrize("text", ["", "   ", "\n\n"])
def test_heading_defaults_for_empty_text(text):
    assert extract_heading(text) == DEFAULT_HEADING


def test_third_level_heading_is_not_a_title():
    assert extract_heading("### Notes\n# Real Title") == "Real Title"


# ============================================================================
# HEX COLORS
# ============================================================================

def test_hex_colors_keep_order_without_synthesis():
    assert extract_hex_colors("Primary: #FF5733, Secondary: #33FF57") == ["#FF5733", "#33FF57"]


def test_hex_colors_deduplicate_case_insensitively():
    assert extract_hex_colors("#abc then #ABC then #112233") == ["#abc", "#112233"]


def test_hex_colors_ignore_invalid_lengths():
    assert extract_hex_colors("#abcd #12345 #1234567 issue#123") == []


def test_hex_colors_capped_at_five():
    text = " ".join(f"#{i}{i}{i}{i}{i}{i}" for i in range(1, 8))
    assert len(extract_hex_colors(text)) == 5


def test_extract_returns_empty_containers_for_plain_text():
    signals = SuggestionExtractor().extract("")
    assert signals.heading == DEFAULT_HEADING
    assert signals.color_hex_codes == []
    assert signals.style_keywords == []
    assert signals.font_keywords == []


# ============================================================================
# KEYWORDS
# ============================================================================

def test_style_and_font_keywords_from_sample():
    signals = SuggestionExtractor().extract(SAMPLE_SUGGESTIONS)

    assert signals.heading == "Bold Modern Branding"
    assert signals.color_hex_codes == ["#FF5733", "#33FF57", "#3357FF"]
    assert signals.style_keywords[:2] == ["bold", "modern"]
    assert "minimalist" in signals.style_keywords
    assert "geometric" in signals.style_keywords
    assert signals.font_keywords == ["montserrat", "sans-serif", "merriweather", "serif"]


def test_serif_not_matched_inside_sans_serif():
    signals = SuggestionExtractor().extract("Pair a clean Sans-Serif with Inter.")
    assert signals.font_keywords == ["sans-serif", "inter"]


def test_multi_word_terms_are_lowercased():
    signals = SuggestionExtractor().extract("Try ART  DECO framing with Playfair Display")
    assert signals.style_keywords == ["art deco"]
    assert signals.font_keywords == ["playfair display", "display"]


# ============================================================================
# COLOR PALETTE
# ============================================================================

def test_palette_without_any_color_is_empty():
    extractor = SuggestionExtractor(rng=random.Random(0))
    assert extractor.build_color_palette("Use generous whitespace and clean type.") == []


def test_palette_keeps_three_found_colors_as_is():
    extractor = SuggestionExtractor(rng=random.Random(0))
    assert extractor.build_color_palette("#111111 #222222 #333333") == ["#111111", "#222222", "#333333"]


def test_palette_synthesizes_from_first_color_when_short():
    extractor = SuggestionExtractor(rng=random.Random(7))
    palette = extractor.build_color_palette("Primary: #FF0000")

    assert palette[0] == "#FF0000"
    assert 3 <= len(palette) <= 5
    assert len({color.upper() for color in palette}) == len(palette)


def test_palette_synthesis_is_reproducible_with_seeded_rng():
    first = SuggestionExtractor(rng=random.Random(42)).build_color_palette("#FF5733")
    second = SuggestionExtractor(rng=random.Random(42)).build_color_palette("#FF5733")
    assert first == second


def test_palette_includes_request_color_and_named_colors():
    extractor = SuggestionExtractor(rng=random.Random(0))
    palette = extractor.build_color_palette("#123456 with soft pink accents", input_color="blue")

    assert palette[:2] == ["#123456", "#0000FF"]
    assert "#FFC0CB" in palette
    assert len(palette) == 5


def test_resolve_color_variants():
    assert resolve_color("#abc") == "#abc"
    assert resolve_color("FF5733") == "#FF5733"
    assert resolve_color("Red") == "#FF0000"
    assert resolve_color("chartreuse-ish") is None
    assert resolve_color(None) is None


def test_color_theory_rotations():
    assert rotate_hue("#FF0000", 120) == "#00FF00"
    assert rotate_hue("#FF0000", 180) == "#00FFFF"
    warmer, cooler = analogous_colors("#FF0000")
    assert warmer.startswith("#FF") and warmer.endswith("00")
    assert cooler.startswith("#FF00")
