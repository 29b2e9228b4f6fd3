from __future__ import annotations

from collections.abc import Callable

import pytest

from busfeed.config import FeedConfig

from helpers import FETCHED_AT_MS


@pytest.fixture
def config() -> FeedConfig:
    return FeedConfig(provider_host="feed.example.com", refresh_interval=0.0)


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    return lambda: FETCHED_AT_MS
