"""
Post List Module

Owns the in-memory post collection and derives the searchable,
paginated list view from it. The collection changes only through
load(), add_post(), apply_update() and remove_post().
"""

import logging
import math
from typing import List, Optional, Tuple
from dataclasses import dataclass

from ..config import config
from ..api.client import APIClient, Post
from ..api.errors import NotFoundError, PostsManagerError
from .confirmation import DeleteConfirmation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostListView:
    """Snapshot of everything the list screen renders."""
    loading: bool
    error: Optional[str]
    posts: Tuple[Post, ...]
    current_page: int
    page_count: int
    search_query: str
    pending_delete_id: Optional[int]


def filter_posts(posts: List[Post], query: str) -> List[Post]:
    """Posts whose title contains query, ignoring case, in original order."""
    needle = query.casefold()
    return [post for post in posts if needle in post.title.casefold()]


def count_pages(item_count: int, page_size: int) -> int:
    """Number of pages for item_count items; 0 when there are none."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(item_count / page_size)


def paginate(posts: List[Post], page: int, page_size: int) -> List[Post]:
    """Slice out 1-based page number page."""
    start = (page - 1) * page_size
    return posts[start:start + page_size]


class PostListManager:
    """
    Manager for the post collection behind the list view.

    Pagination policy: whenever the filtered collection can shrink, the
    current page is clamped to the last page that exists (page 1 when
    there are none).
    """

    def __init__(self, api: APIClient, page_size: Optional[int] = None):
        """
        Initialize the list manager.

        Args:
            api: Client used for loading and deleting posts.
            page_size: Posts per page (uses config default if None).
        """
        self.api = api
        self.page_size = page_size if page_size is not None else config.display.page_size
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

        self.posts: List[Post] = []
        self.search_query = ""
        self.current_page = 1
        self.loading = False
        self.error: Optional[str] = None
        self.deleting = False
        self.delete_flow = DeleteConfirmation()
        logger.info(f"PostListManager initialized (page_size: {self.page_size})")

    # Derived views

    @property
    def filtered_posts(self) -> List[Post]:
        return filter_posts(self.posts, self.search_query)

    @property
    def page_count(self) -> int:
        return count_pages(len(self.filtered_posts), self.page_size)

    @property
    def current_posts(self) -> List[Post]:
        return paginate(self.filtered_posts, self.current_page, self.page_size)

    def view(self) -> PostListView:
        """Build the list view; no posts are shown while loading or failed."""
        show_posts = not self.loading and self.error is None
        return PostListView(
            loading=self.loading,
            error=self.error,
            posts=tuple(self.current_posts) if show_posts else (),
            current_page=self.current_page,
            page_count=self.page_count,
            search_query=self.search_query,
            pending_delete_id=self.delete_flow.selected_id,
        )

    # Navigation

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        self._clamp_page()

    def go_to_page(self, page: int) -> int:
        """
        Move to a page, clamped into the valid range.

        Returns:
            The page actually selected.
        """
        self.current_page = page
        self._clamp_page()
        return self.current_page

    def _clamp_page(self) -> None:
        last_page = max(self.page_count, 1)
        clamped = min(max(self.current_page, 1), last_page)
        if clamped != self.current_page:
            logger.debug(f"Clamping page {self.current_page} -> {clamped}")
        self.current_page = clamped

    # Collection

    async def load(self) -> bool:
        """
        Replace the collection with the server's posts.

        Returns:
            True on success; on failure the message is kept in self.error.
        """
        self.loading = True
        self.error = None
        try:
            self.posts = await self.api.list_posts()
            logger.info(f"Loaded {len(self.posts)} posts")
            return True
        except PostsManagerError as e:
            logger.error(f"Failed to load posts: {e}")
            self.error = f"Failed to load posts: {e}"
            return False
        finally:
            self.loading = False
            self._clamp_page()

    def find_post(self, post_id: int) -> Optional[Post]:
        """Look up a loaded post by id."""
        for post in self.posts:
            if post.id == post_id:
                return post
        return None

    def add_post(self, post: Post) -> None:
        """Put a newly created post at the top of the list."""
        self.posts.insert(0, post)
        logger.debug(f"Added post {post.id}")

    def apply_update(self, post: Post) -> bool:
        """
        Replace the entry with the same id, keeping its position.

        Returns:
            False if no entry matches.
        """
        for index, existing in enumerate(self.posts):
            if existing.id == post.id:
                self.posts[index] = post
                logger.debug(f"Updated post {post.id}")
                return True

        logger.warning(f"Update for unknown post {post.id} ignored")
        return False

    def remove_post(self, post_id: int) -> bool:
        """
        Remove the entry with post_id. Removing an absent id is a no-op.

        Returns:
            True if an entry was removed.
        """
        remaining = [post for post in self.posts if post.id != post_id]
        removed = len(remaining) != len(self.posts)
        self.posts = remaining
        self._clamp_page()

        if not removed:
            logger.debug(f"Post {post_id} not in collection, nothing removed")
        return removed

    # Delete flow

    def request_delete(self, post_id: int) -> None:
        self.delete_flow.select(post_id)

    def cancel_delete(self) -> None:
        self.delete_flow.cancel()

    async def confirm_delete(self, post_id: Optional[int] = None) -> bool:
        """
        Delete the post awaiting confirmation.

        Args:
            post_id: If given, must match the pending selection.

        Returns:
            True if the post was removed from the collection.

        Raises:
            ConfirmationError: If no matching delete is pending.
        """
        if self.deleting:
            logger.warning("Delete already in progress, ignoring confirmation")
            return False

        target = self.delete_flow.confirm(post_id)
        self.deleting = True
        try:
            await self.api.delete_post(target)
        except NotFoundError:
            logger.warning(f"Post {target} was already deleted on the server")
        except PostsManagerError as e:
            logger.error(f"Failed to delete post {target}: {e}")
            self.error = f"Failed to delete post: {e}"
            return False
        finally:
            self.deleting = False

        return self.remove_post(target)
