"""
Transient Notification Module

A toast message that dismisses itself after a fixed duration.
Expiry is computed from a clock rather than a timer, so reading the
notification never blocks and tests can drive time explicitly.
"""

import logging
import time
from typing import Callable, Optional

from ..config import config


logger = logging.getLogger(__name__)


class TransientNotification:
    """
    Auto-dismissing user-facing message.
    """

    def __init__(
        self,
        duration: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the notification.

        Args:
            duration: Seconds a message stays visible (uses config default if None).
            clock: Monotonic time source.
        """
        self.duration = duration if duration is not None else config.display.toast_duration_seconds
        self._clock = clock
        self._message: Optional[str] = None
        self._expires_at = 0.0

    def show(self, message: str) -> None:
        """Display a message, replacing any message still visible."""
        self._message = message
        self._expires_at = self._clock() + self.duration
        logger.info(f"Notification: {message}")

    def dismiss(self) -> None:
        self._message = None

    @property
    def visible(self) -> bool:
        return self._message is not None and self._clock() < self._expires_at

    @property
    def message(self) -> Optional[str]:
        """The current message, or None once dismissed or expired."""
        return self._message if self.visible else None
