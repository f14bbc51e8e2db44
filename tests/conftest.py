"""Global pytest fixtures for backend tests.

Provider adapters, the LLM advisor and the WebDriver are replaced by the
doubles in ``fakes.py``; no test opens a socket.
"""

import random

import pytest

from backend.config import Settings
from fakes import FakeAdvisor


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="test-openai",
        serpapi_key="test-serpapi",
        freepik_api_key="test-freepik",
        enable_scrapers=False,
        cors_origins=["http://localhost:5173"],
    )


@pytest.fixture
def advisor() -> FakeAdvisor:
    return FakeAdvisor()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
