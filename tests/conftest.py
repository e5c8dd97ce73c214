"""Pytest configuration and fixtures."""

from typing import Any, Dict

import pytest
import requests_mock

from boatsafe.config import Settings
from boatsafe.display import HtmlContainer
from tests.http_stubs import DISCUSSION_URL, SITE_ORIGIN, make_payload


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings pointing at a deployed origin."""
    return Settings(
        _env_file=None,
        site_origin=SITE_ORIGIN,
        default_office="AJK",
        discussion_cache_ttl=30,
        display_timezone="America/Anchorage",
        log_level="DEBUG",
    )


@pytest.fixture
def container() -> HtmlContainer:
    """Container that records every render."""
    return HtmlContainer("discussion", keep_history=True)


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return make_payload()


@pytest.fixture
def mock_discussion_endpoint(sample_payload: Dict[str, Any]):
    """Mock the forecast discussion proxy."""
    with requests_mock.Mocker() as m:
        m.get(DISCUSSION_URL, json=sample_payload)
        yield m
