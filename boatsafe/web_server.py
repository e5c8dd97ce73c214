"""Web server for the BoatSafe marine dashboard."""

import asyncio
import html
import logging
import threading
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from boatsafe.bulletin import Bulletin
from boatsafe.config import Settings, settings as default_settings
from boatsafe.discussion import DiscussionWidget
from boatsafe.display import HtmlContainer
from boatsafe.http_client import HttpClient
from boatsafe.utils import is_local_origin, is_valid_office

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>BoatSafe - {office} Forecast Discussion</title>
</head>
<body>
<main class="dashboard">
{widget}
</main>
</body>
</html>
"""


class InvalidOfficeError(ValueError):
    """Raised when a request names something other than an office code."""

    pass


def create_web_server(
    http_client: Optional[Any] = None,
    config: Optional[Settings] = None,
) -> Flask:
    """Create Flask web server hosting the discussion widget.

    Every request renders into its own widget and container. The HTTP client,
    and with it the response cache, is shared across requests.
    """

    app = Flask(__name__)
    config = config or default_settings
    http_client = http_client or HttpClient.from_settings(config)

    if config.is_production() and is_local_origin(config.site_origin):
        logger.warning(
            f"Production server is using a local site origin ({config.site_origin}); "
            "the dashboard will only show the development placeholder"
        )

    latest: Dict[str, Optional[DiscussionWidget]] = {"widget": None}
    latest_lock = threading.Lock()

    def requested_office() -> Optional[str]:
        office = request.args.get("office")
        if not office:
            return None
        if not is_valid_office(office):
            logger.warning(f"Rejected office parameter: {office!r}")
            raise InvalidOfficeError("Invalid office code")
        return office.upper()

    def load_widget(office: Optional[str]) -> DiscussionWidget:
        widget = DiscussionWidget(
            HtmlContainer("discussion"),
            http_client,
            origin=config.site_origin,
            config=config,
        )
        asyncio.run(widget.load(office))
        with latest_lock:
            latest["widget"] = widget
        return widget

    @app.errorhandler(InvalidOfficeError)
    def invalid_office(e: InvalidOfficeError) -> Any:
        return jsonify({"error": str(e)}), 400

    @app.route("/", methods=["GET"])
    def dashboard() -> Any:
        """Dashboard page with the discussion widget."""
        office = requested_office()
        try:
            widget = load_widget(office)
            page = PAGE_TEMPLATE.format(
                office=html.escape(widget.current_office or config.default_office),
                widget=widget.container.to_element(),
            )
            return Response(page, mimetype="text/html")
        except Exception as e:
            logger.error(f"Error rendering dashboard: {e}")
            return jsonify({"error": str(e)}), 500

    @app.route("/discussion", methods=["GET"])
    def discussion_fragment() -> Any:
        """Load the discussion and return the widget markup."""
        office = requested_office()
        try:
            widget = load_widget(office)
            return Response(widget.container.html, mimetype="text/html")
        except Exception as e:
            logger.error(f"Error loading discussion fragment: {e}")
            return jsonify({"error": str(e)}), 500

    @app.route("/api/discussion", methods=["GET"])
    def discussion_data() -> Any:
        """Return the bulletin from the most recently completed load."""
        with latest_lock:
            widget = latest["widget"]
        if widget is None:
            return jsonify({"office": None, "data": None})

        bulletin = Bulletin.from_payload(widget.current_data)
        return jsonify(
            {
                "office": widget.current_office,
                "data": bulletin.to_dict() if bulletin else None,
            }
        )

    @app.route("/health", methods=["GET"])
    def health_check() -> Any:
        """Health check endpoint."""
        return jsonify(
            {
                "status": "healthy",
                "service": "boatsafe",
                "environment": config.environment,
            }
        )

    return app
