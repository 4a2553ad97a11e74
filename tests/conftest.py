"""Shared test configuration and fixtures."""

import os

# Must be set before the app module creates its settings
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from src.config.settings import get_settings


def firestore_timestamp(year: int, month: int, day: int, nanoseconds: int = 0) -> dict:
    """Build the {seconds, nanoseconds} shape the front-end sends for dates."""
    moment = datetime(year, month, day, 12, tzinfo=timezone.utc)
    return {"seconds": int(moment.timestamp()), "nanoseconds": nanoseconds}


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_rounds() -> list[dict]:
    """Three rounds as the front-end posts them, deliberately unsorted."""
    return [
        {
            "courseName": "Oakwood",
            "layoutName": "Blue",
            "date": firestore_timestamp(2023, 2, 15),
            "totalScore": 72,
            "scoreToPar": 9,
            "scores": [4, 5, 4, 6],
        },
        {
            "courseName": "Pleasant Valley",
            "layoutName": "Long",
            "scoreToPar": 2,
        },
        {
            "courseName": "Maple Hill",
            "layoutName": "Red",
            "date": firestore_timestamp(2023, 1, 1),
            "totalScore": 55,
            "scoreToPar": -2,
            "scores": [3, 4, 3, 5],
        },
    ]


@pytest.fixture
def text_client() -> AsyncMock:
    """Stand-in for the LLM client; returns a canned answer."""
    client = AsyncMock()
    client.generate.return_value = "Course: Maple Hill, Layout: Red, Score: 55"
    return client
