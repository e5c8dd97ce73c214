"""Command line entry point for BoatSafe."""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import settings
from .discussion import DiscussionWidget
from .display import HtmlContainer
from .http_client import HttpClient

console = Console()


# Configure logging
def setup_logging(level: str) -> None:
    """Set up logging with Rich handler or JSON lines."""
    log_level = getattr(logging, level.upper())
    if settings.log_json:

        class JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
                    "message": record.getMessage(),
                    "name": record.name,
                }
                return json.dumps(payload)

        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=log_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=log_level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, rich_tracebacks=True)],
            force=True,
        )


logger = logging.getLogger(__name__)


def render_discussion(office: Optional[str] = None, origin: Optional[str] = None) -> str:
    """Load one discussion and return the widget markup."""
    container = HtmlContainer("discussion")
    widget = DiscussionWidget(
        container, HttpClient.from_settings(settings), origin=origin
    )
    asyncio.run(widget.load(office))
    return container.html


@click.command()
@click.option(
    "--mode",
    default="render",
    type=click.Choice(["render", "serve"]),
    help="Print one rendered discussion or run the dashboard server",
)
@click.option("--office", default=None, help="Forecast office code (default AJK)")
@click.option("--origin", default=None, help="Site origin used to reach the proxy")
@click.option("--port", default=8000, type=int, help="Port for serve mode")
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Set logging level",
)
def main(
    mode: str,
    office: Optional[str],
    origin: Optional[str],
    port: int,
    log_level: str,
) -> None:
    """Run the BoatSafe forecast discussion dashboard."""
    if log_level:
        settings.log_level = log_level

    setup_logging(settings.log_level)

    if mode == "serve":
        from .web_server import create_web_server

        if origin:
            settings.site_origin = origin
        logger.info(f"🌊 Starting BoatSafe dashboard on port {port}")
        app = create_web_server()
        app.run(host="0.0.0.0", port=port)
        return

    try:
        markup = render_discussion(office, origin)
    except Exception as e:
        logger.error(f"Failed to render forecast discussion: {e}")
        console.print(f"[red]❌ Render failed:[/red] {e}")
        sys.exit(1)

    console.print(markup, markup=False, highlight=False)


if __name__ == "__main__":
    main()
