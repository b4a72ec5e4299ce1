"""Desktop notification back end built on plyer."""

import logging
from typing import Optional

from plyer import notification

from .chime import NotificationError


class PlyerDesktopNotifier:
    """Shows phase changes as OS desktop notifications."""
    def __init__(
        self,
        app_name: str = "Focus Timer",
        timeout_seconds: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        self._app_name = app_name
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger(__name__)

    def show(self, title: str, message: str) -> None:
        self._logger.debug("Desktop notification: %s: %s", title, message)
        try:
            notification.notify(
                title=title,
                message=message,
                app_name=self._app_name,
                timeout=self._timeout_seconds,
            )
        except Exception as error:
            # plyer raises NotImplementedError when no platform backend exists.
            raise NotificationError(f"Desktop notification failed: {error}") from error
