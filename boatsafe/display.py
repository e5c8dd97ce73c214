"""Display surfaces the discussion widget renders into."""

from typing import List, Protocol


class DisplaySurface(Protocol):
    """Protocol for a container that receives widget markup."""

    def set_html(self, html: str) -> None:
        """Replace the container content.

        Args:
            html: Markup that becomes the sole content of the container
        """
        ...


class HtmlContainer:
    """In-memory container holding the last markup written to it."""

    def __init__(self, element_id: str = "discussion", keep_history: bool = False):
        """Initialize container.

        Args:
            element_id: id attribute used when the container is embedded in a page
            keep_history: Record every write, for inspecting render sequences
        """
        self.element_id = element_id
        self.html = ""
        self.keep_history = keep_history
        self.history: List[str] = []

    def set_html(self, html: str) -> None:
        self.html = html
        if self.keep_history:
            self.history.append(html)

    def to_element(self) -> str:
        """Wrap the current content in its container element."""
        return (
            f'<section id="{self.element_id}" class="widget">'
            f'<div class="discussion-content">{self.html}</div>'
            "</section>"
        )
