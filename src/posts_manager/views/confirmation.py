"""
Delete Confirmation Module

Two-step guard in front of destructive calls: a post is selected,
then the selection is confirmed or cancelled.
"""

import logging
from enum import Enum
from typing import Optional

from ..api.errors import ConfirmationError


logger = logging.getLogger(__name__)


class ConfirmationState(Enum):
    IDLE = "idle"
    PENDING_CONFIRMATION = "pending_confirmation"


class DeleteConfirmation:
    """
    State holder for the select -> confirm/cancel flow.
    """

    message = "Are you sure you want to delete this post?"

    def __init__(self):
        self.state = ConfirmationState.IDLE
        self.selected_id: Optional[int] = None

    @property
    def is_pending(self) -> bool:
        return self.state is ConfirmationState.PENDING_CONFIRMATION

    def select(self, post_id: int) -> None:
        """Ask for confirmation before deleting post_id."""
        self.state = ConfirmationState.PENDING_CONFIRMATION
        self.selected_id = post_id
        logger.debug(f"Delete requested for post {post_id}")

    def cancel(self) -> None:
        if self.is_pending:
            logger.debug(f"Delete cancelled for post {self.selected_id}")
        self._reset()

    def confirm(self, post_id: Optional[int] = None) -> int:
        """
        Confirm the pending selection.

        Args:
            post_id: If given, must match the selected post.

        Returns:
            The id of the post to delete.

        Raises:
            ConfirmationError: If nothing is pending or the id does not match.
        """
        if not self.is_pending or self.selected_id is None:
            raise ConfirmationError("No delete is awaiting confirmation")
        if post_id is not None and post_id != self.selected_id:
            raise ConfirmationError(
                f"Confirmation for post {post_id} does not match "
                f"pending post {self.selected_id}"
            )

        selected = self.selected_id
        self._reset()
        logger.debug(f"Delete confirmed for post {selected}")
        return selected

    def _reset(self) -> None:
        self.state = ConfirmationState.IDLE
        self.selected_id = None
