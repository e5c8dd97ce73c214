"""
Forecast discussion widget.

Loads the Area Forecast Discussion for a forecast office and renders it into
a display surface as a header plus formatted, highlighted paragraphs.

Load cycle:
- show loading state
- local development origin: render a placeholder, no network
- otherwise fetch the bulletin once, then render it or show an error

Overlapping loads are not cancelled. Each load takes a generation number and,
unless stale dropping is disabled, only the newest generation may update
state when its response arrives.
"""

import html
import logging
from typing import Any, Dict, Optional

from boatsafe.bulletin import Bulletin
from boatsafe.config import Settings, settings as default_settings
from boatsafe.date_format import DateFormatter
from boatsafe.display import DisplaySurface
from boatsafe.text_formatter import clean_text, format_text
from boatsafe.utils import is_local_origin

logger = logging.getLogger(__name__)

LOADING_HTML = '<div class="loading">Loading discussion...</div>'

LOCAL_DEV_PLACEHOLDER = """
<div class="forecast-period">
    <div class="period-header">
        <strong>Forecast Discussion</strong>
        <span class="period-time">Local Development Mode</span>
    </div>
    <div class="forecast-text">
        Deploy to Netlify to see the real Area Forecast Discussion from meteorologists.
        <br><br>
        This widget displays technical meteorological analysis and reasoning behind the forecast.
    </div>
</div>
"""

LOAD_ERROR_MESSAGE = "Unable to load forecast discussion"
EMPTY_DISCUSSION_MESSAGE = "No discussion available"


class DiscussionWidget:
    """Area Forecast Discussion widget bound to one display container."""

    def __init__(
        self,
        container: DisplaySurface,
        http_client: Any,
        origin: Optional[str] = None,
        config: Optional[Settings] = None,
        date_formatter: Optional[DateFormatter] = None,
    ):
        self.container = container
        self.http = http_client
        self.config = config or default_settings
        self.origin = origin or self.config.site_origin
        self.date_formatter = date_formatter or DateFormatter(
            self.config.display_timezone
        )

        self.current_data: Optional[Dict[str, Any]] = None
        self.current_office: Optional[str] = None
        self._generation = 0

    async def init(self) -> None:
        """Show the loading state and load the default office."""
        self.show_loading()
        await self.load()

    def update(self, data: Optional[Dict[str, Any]]) -> None:
        """Replace the current bulletin payload and render it."""
        self.current_data = data
        self._render_safely()

    async def load(self, office: Optional[str] = None) -> None:
        """Load the discussion for a forecast office.

        Args:
            office: Forecast office code, defaults to the configured office (AJK)
        """
        office = office or self.config.default_office
        self.current_office = office
        self._generation += 1
        generation = self._generation
        self.show_loading()

        if is_local_origin(self.origin):
            self.show_local_dev_placeholder()
            return

        url = self.config.resolve_discussion_url(self.origin)
        logger.info(f"Fetching forecast discussion from: {url}")

        try:
            data = await self.http.get(
                url,
                cache_ttl=self.config.discussion_cache_ttl,
                params={"office": office},
            )
        except Exception as e:
            if self._is_stale(generation):
                logger.debug(f"Ignoring failure from superseded load for {office}: {e}")
                return
            logger.error(f"Failed to load forecast discussion: {e}")
            self.show_error(LOAD_ERROR_MESSAGE)
            return

        if self._is_stale(generation):
            logger.debug(f"Dropping superseded forecast discussion for {office}")
            return

        logger.info(f"Received forecast discussion data for {office}")
        self.current_data = data
        self._render_safely()

    def _render_safely(self) -> None:
        try:
            self.render()
        except Exception as e:
            logger.error(f"Failed to render forecast discussion: {e}")
            self.show_error(LOAD_ERROR_MESSAGE)

    def _is_stale(self, generation: int) -> bool:
        return (
            self.config.drop_stale_discussions and generation != self._generation
        )

    def render(self) -> None:
        """Render current_data into the container."""
        data = self.current_data
        if data is None:
            self.show_loading()
            return

        bulletin = Bulletin.from_payload(data)
        if bulletin is None:
            logger.warning("Forecast discussion payload has no properties")
            self.show_error(LOAD_ERROR_MESSAGE)
            return

        if not bulletin.has_text or not clean_text(bulletin.text):
            self.show_error(EMPTY_DISCUSSION_MESSAGE)
            return

        issued = bulletin.issued_time or self.date_formatter.format(bulletin.updated)
        self.container.set_html(
            f"""
<div class="forecast-period">
    <div class="period-header">
        <strong>Forecast Discussion - {html.escape(bulletin.display_name)}</strong>
        <span class="period-time">{html.escape(issued)}</span>
    </div>
    <div class="forecast-text">
        {format_text(bulletin.text)}
    </div>
</div>
"""
        )

    def show_local_dev_placeholder(self) -> None:
        self.container.set_html(LOCAL_DEV_PLACEHOLDER)

    def show_loading(self) -> None:
        self.container.set_html(LOADING_HTML)

    def show_error(self, message: str) -> None:
        self.container.set_html(
            f"""
<div class="status-message status-error">
    <strong>Error:</strong> {html.escape(message)}
</div>
"""
        )

    def clear(self) -> None:
        """Forget the current bulletin and show the loading state."""
        self.current_data = None
        self.show_loading()
