"""
Navigation seam.

Workflows that leave the application (hosted checkout, billing portal)
or move between views call an INavigator instead of a browser API.
"""

import logging
import webbrowser
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

HOME_PATH = "/"
DASHBOARD_PATH = "/dashboard"


@runtime_checkable
class INavigator(Protocol):
    """Interface for moving the user somewhere else."""

    def redirect(self, url: str) -> None:
        """Full navigation to an external URL. Control leaves the application."""
        ...

    def replace(self, path: str) -> None:
        """In-app navigation that replaces the current history entry."""
        ...


class BrowserNavigator:
    """
    Navigator for the terminal front end.

    External URLs open in the system browser; in-app paths are only
    remembered, since the terminal has a single view.
    """

    def __init__(self, open_browser: bool = True):
        self._open_browser = open_browser
        self.location: Optional[str] = None

    def redirect(self, url: str) -> None:
        logger.info(f"Redirecting to {url}")
        self.location = url
        if self._open_browser:
            webbrowser.open(url)

    def replace(self, path: str) -> None:
        logger.debug(f"Navigating to {path}")
        self.location = path
