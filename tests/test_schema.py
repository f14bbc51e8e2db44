"""Tests for result item validation and identity."""

import pytest
from pydantic import ValidationError

from backend.models.schema import SOURCE_NAMES, ResultItem, normalize_image_url


@pytest.mark.parametrize("source", SOURCE_NAMES)
def test_known_sources_are_accepted(source):
    assert ResultItem(image_url="https://img.example.com/a.png", source_name=source).source_name == source


@pytest.mark.parametrize("source", ["Bing", "pinterest", ""])
def test_unknown_source_is_rejected(source):
    with pytest.raises(ValidationError, match="Unknown source"):
        ResultItem(image_url="https://img.example.com/a.png", source_name=source)


def test_normalized_url_ignores_case_fragment_and_trailing_slash():
    assert normalize_image_url("HTTPS://CDN.Example.com/a.png/#zoom") == "https://cdn.example.com/a.png"
    assert normalize_image_url("https://cdn.example.com/a.png?w=200") == "https://cdn.example.com/a.png?w=200"
