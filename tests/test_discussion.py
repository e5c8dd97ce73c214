"""Tests for boatsafe/discussion.py - loader and renderer."""

import asyncio
from typing import Any, Tuple

import pytest

from boatsafe.config import Settings
from boatsafe.discussion import (
    EMPTY_DISCUSSION_MESSAGE,
    LOAD_ERROR_MESSAGE,
    LOADING_HTML,
    DiscussionWidget,
)
from boatsafe.display import HtmlContainer
from boatsafe.http_client import HttpClientError
from tests.http_stubs import (
    DISCUSSION_URL,
    SITE_ORIGIN,
    FakeHttpClient,
    GatedHttpClient,
    make_payload,
)


def _widget(
    container: HtmlContainer, client: Any, settings: Settings, origin: str = SITE_ORIGIN
) -> DiscussionWidget:
    return DiscussionWidget(container, client, origin=origin, config=settings)


class TestLoad:
    """Tests for DiscussionWidget.load."""

    def test_load_default_office(
        self, container: HtmlContainer, test_settings: Settings, sample_payload: dict
    ) -> None:
        client = FakeHttpClient(sample_payload)
        widget = _widget(container, client, test_settings)

        asyncio.run(widget.load())

        assert widget.current_office == "AJK"
        assert widget.current_data == sample_payload
        assert client.calls == [
            {"url": DISCUSSION_URL, "cache_ttl": 30, "params": {"office": "AJK"}}
        ]
        assert container.history[0] == LOADING_HTML
        assert "Forecast Discussion - Juneau, AK" in container.html
        assert "<strong>LOW PRESSURE</strong>" in container.html

    def test_load_specific_office(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        payload = make_payload(office="AFC", office_name="Anchorage, AK")
        client = FakeHttpClient(payload)
        widget = _widget(container, client, test_settings)

        asyncio.run(widget.load("AFC"))

        assert widget.current_office == "AFC"
        assert client.calls[0]["params"] == {"office": "AFC"}
        assert "Forecast Discussion - Anchorage, AK" in container.html

    def test_local_origin_shows_placeholder(
        self, container: HtmlContainer, test_settings: Settings, sample_payload: dict
    ) -> None:
        client = FakeHttpClient(sample_payload)
        widget = _widget(container, client, test_settings, origin="http://localhost:3000")

        asyncio.run(widget.load())

        assert client.calls == []
        assert widget.current_data is None
        assert container.history[0] == LOADING_HTML
        assert "Local Development Mode" in container.html
        assert "Error" not in container.html

    def test_fetch_failure_shows_error(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        client = FakeHttpClient(error=HttpClientError("connection refused"))
        widget = _widget(container, client, test_settings)

        asyncio.run(widget.load())

        assert widget.current_data is None
        assert len(container.history) == 2
        assert container.history[0] == LOADING_HTML
        assert LOAD_ERROR_MESSAGE in container.html
        assert "status-error" in container.html

    def test_fetch_failure_keeps_previous_data(
        self, container: HtmlContainer, test_settings: Settings, sample_payload: dict
    ) -> None:
        widget = _widget(container, FakeHttpClient(sample_payload), test_settings)
        asyncio.run(widget.load())

        widget.http = FakeHttpClient(error=RuntimeError("boom"))
        asyncio.run(widget.load())

        assert widget.current_data == sample_payload
        assert LOAD_ERROR_MESSAGE in container.html

    def test_init_loads_default_office(
        self, container: HtmlContainer, test_settings: Settings, sample_payload: dict
    ) -> None:
        client = FakeHttpClient(sample_payload)
        widget = _widget(container, client, test_settings)

        asyncio.run(widget.init())

        assert len(client.calls) == 1
        assert widget.current_office == "AJK"


class TestOverlappingLoads:
    """Tests for loads that resolve out of order."""

    @staticmethod
    def _run_out_of_order(
        container: HtmlContainer, settings: Settings
    ) -> Tuple[DiscussionWidget, dict, dict]:
        first_payload = make_payload(office="AJK", office_name="Juneau, AK")
        second_payload = make_payload(office="AFC", office_name="Anchorage, AK")

        async def scenario() -> DiscussionWidget:
            client = GatedHttpClient({"AJK": first_payload, "AFC": second_payload})
            widget = _widget(container, client, settings)

            first = asyncio.create_task(widget.load("AJK"))
            await asyncio.sleep(0)
            second = asyncio.create_task(widget.load("AFC"))
            await asyncio.sleep(0)

            client.gates["AFC"].set()
            await second
            client.gates["AJK"].set()
            await first
            return widget

        return asyncio.run(scenario()), first_payload, second_payload

    def test_superseded_response_is_dropped(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        widget, _, second_payload = self._run_out_of_order(container, test_settings)

        assert widget.current_office == "AFC"
        assert widget.current_data == second_payload
        assert "Anchorage, AK" in container.html

    def test_last_resolved_wins_without_stale_dropping(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        test_settings.drop_stale_discussions = False

        widget, first_payload, _ = self._run_out_of_order(container, test_settings)

        assert widget.current_data == first_payload
        assert "Juneau, AK" in container.html


class TestRender:
    """Tests for DiscussionWidget.render."""

    @pytest.fixture
    def widget(self, container: HtmlContainer, test_settings: Settings) -> DiscussionWidget:
        return _widget(container, FakeHttpClient(), test_settings)

    def test_no_data_shows_loading(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.render()
        assert container.html == LOADING_HTML

    def test_missing_properties_shows_error(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.update({"features": []})
        assert LOAD_ERROR_MESSAGE in container.html

    @pytest.mark.parametrize("text", ["", "   \n\t", "usa.gov and nothing else"])
    def test_empty_text_shows_no_discussion(
        self, widget: DiscussionWidget, container: HtmlContainer, text: str
    ) -> None:
        widget.update(make_payload(text=text))

        assert EMPTY_DISCUSSION_MESSAGE in container.html
        assert "forecast-text" not in container.html

    def test_prefers_issued_time(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.update(make_payload(issued_time="1130 AM AKST MON JAN 15 2024"))
        assert '<span class="period-time">1130 AM AKST MON JAN 15 2024</span>' in container.html

    def test_formats_updated_timestamp(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.update(make_payload(updated="2024-01-15T20:30:00Z"))
        assert '<span class="period-time">Jan 15, 11:30 AM</span>' in container.html

    def test_invalid_timestamp_shows_unknown(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.update(make_payload(updated="sometime"))
        assert '<span class="period-time">Unknown</span>' in container.html

    def test_office_code_when_name_missing(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.update(make_payload(office="AFG", office_name=None))
        assert "Forecast Discussion - AFG" in container.html

    def test_header_is_escaped(
        self, widget: DiscussionWidget, container: HtmlContainer
    ) -> None:
        widget.update(make_payload(office_name="Juneau <AK> & Yakutat"))
        assert "Juneau &lt;AK&gt; &amp; Yakutat" in container.html

    def test_clear(self, widget: DiscussionWidget, container: HtmlContainer) -> None:
        widget.update(make_payload())
        widget.clear()

        assert widget.current_data is None
        assert container.html == LOADING_HTML


class TestMalformedPayloads:
    """Tests for payloads whose fields have unexpected types."""

    def test_non_string_text_shows_no_discussion(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        client = FakeHttpClient({"properties": {"office": "AJK", "text": 123}})
        widget = _widget(container, client, test_settings)

        asyncio.run(widget.load())

        assert EMPTY_DISCUSSION_MESSAGE in container.html
        assert container.html != LOADING_HTML

    def test_non_string_office_name_falls_back_to_code(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        payload = make_payload(office="AFG")
        payload["properties"]["officeName"] = 5
        widget = _widget(container, FakeHttpClient(payload), test_settings)

        asyncio.run(widget.load("AFG"))

        assert "Forecast Discussion - AFG" in container.html

    def test_render_failure_after_fetch_shows_error(
        self,
        container: HtmlContainer,
        test_settings: Settings,
        sample_payload: dict,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def explode(text: str) -> str:
            raise ValueError("bad bulletin")

        monkeypatch.setattr("boatsafe.discussion.format_text", explode)
        widget = _widget(container, FakeHttpClient(sample_payload), test_settings)

        asyncio.run(widget.load())

        assert widget.current_data == sample_payload
        assert LOAD_ERROR_MESSAGE in container.html

    def test_update_render_failure_shows_error(
        self, container: HtmlContainer, test_settings: Settings
    ) -> None:
        widget = _widget(container, FakeHttpClient(), test_settings)
        widget.date_formatter = None

        widget.update(make_payload(issued_time=None))

        assert LOAD_ERROR_MESSAGE in container.html
