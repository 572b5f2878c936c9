"""Progress reporter that shows pending exchanges in the app header."""

import logging

from textual.app import App

logger = logging.getLogger(__name__)


class HeaderProgress:
    """Shows the pending-exchange message as the app's subtitle."""

    def __init__(self, app: App, idle_text: str = ""):
        self.app = app
        self.idle_text = idle_text

    def announce(self, message: str) -> None:
        logger.debug(f"Progress: {message}")
        self.app.sub_title = message

    def clear(self) -> None:
        self.app.sub_title = self.idle_text
