"""Navigation targets for the OAuth flow"""

import logging
import webbrowser
from abc import ABC, abstractmethod
from typing import List


logger = logging.getLogger(__name__)


class Navigator(ABC):
    """Where the session flow sends the user next"""

    @abstractmethod
    def push(self, route: str) -> None:
        """Navigate to an application route"""

    @abstractmethod
    def refresh(self) -> None:
        """Re-evaluate anything derived from the authentication state"""

    @abstractmethod
    def open_external(self, url: str) -> None:
        """Perform a full navigation away from the application"""


class RecordingNavigator(Navigator):
    """Navigator that remembers every navigation it was asked to perform"""

    def __init__(self):
        self.history: List[str] = []
        self.external: List[str] = []
        self.refresh_count = 0

    @property
    def location(self):
        return self.history[-1] if self.history else None

    def push(self, route: str) -> None:
        logger.debug(f"Navigating to {route}")
        self.history.append(route)

    def refresh(self) -> None:
        self.refresh_count += 1

    def open_external(self, url: str) -> None:
        self.external.append(url)


class BrowserNavigator(RecordingNavigator):
    """Opens external URLs in the user's web browser"""

    def __init__(self, console=None):
        super().__init__()
        self.console = console

    def open_external(self, url: str) -> None:
        super().open_external(url)
        if webbrowser.open(url):
            logger.info("Browser opened for Google login")
            if self.console:
                self.console.print("[green][OK][/green] Browser opened successfully")
            return

        logger.warning("Could not open browser automatically")
        if self.console:
            self.console.print("[yellow]Could not open browser automatically[/yellow]")
            self.console.print(f"Please open this URL manually:\n{url}")
