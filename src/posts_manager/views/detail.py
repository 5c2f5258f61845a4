"""
Detail Viewer Module

Fetches and holds a single post by id, independent of the list's
collection. A newer show() supersedes any fetch still in flight.
"""

import logging
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from ..api.client import APIClient, Post
from ..api.errors import PostsManagerError
from .notifications import TransientNotification


logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Post does not exist"


class DetailState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYED = "displayed"
    FAILED = "failed"


@dataclass(frozen=True)
class DetailView:
    """Snapshot of the detail screen."""
    state: DetailState
    post: Optional[Post]
    toast: Optional[str]


class DetailViewer:
    """
    Viewer for a single post.

    Each show() call takes a new generation number; results belonging
    to an older generation are discarded.
    """

    def __init__(
        self,
        api: APIClient,
        notification: Optional[TransientNotification] = None
    ):
        self.api = api
        self.notification = notification or TransientNotification()
        self.state = DetailState.IDLE
        self.post_id: Optional[int] = None
        self.post: Optional[Post] = None
        self.error: Optional[str] = None
        self._generation = 0
        logger.info("DetailViewer initialized")

    async def show(self, post_id: int) -> Optional[Post]:
        """
        Load and display a post.

        Args:
            post_id: Id of the post to display.

        Returns:
            The displayed post, or None if the fetch failed or was superseded.
        """
        self._generation += 1
        generation = self._generation

        self.post_id = post_id
        self.state = DetailState.LOADING
        self.post = None
        self.error = None

        try:
            post = await self.api.get_post(post_id)
        except PostsManagerError as e:
            if generation != self._generation:
                logger.debug(f"Discarding stale failure for post {post_id}")
                return None
            logger.warning(f"Could not load post {post_id}: {e}")
            self.state = DetailState.FAILED
            self.error = str(e)
            self.notification.show(NOT_FOUND_MESSAGE)
            return None

        if generation != self._generation:
            logger.debug(f"Discarding stale result for post {post_id}")
            return None

        self.post = post
        self.state = DetailState.DISPLAYED
        return post

    def view(self) -> DetailView:
        return DetailView(
            state=self.state,
            post=self.post,
            toast=self.notification.message,
        )
