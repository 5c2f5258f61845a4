"""
Post Forms Module

Create and update forms: collect title and description, validate them
locally, submit through the API client, then hand the stored post to a
caller-supplied callback and navigate back to the list.
"""

import logging
from typing import Callable, Optional

from ..config import config
from ..api.client import APIClient, Post
from ..api.errors import PostsManagerError, ValidationError


logger = logging.getLogger(__name__)

EMPTY_FIELDS_MESSAGE = "Title and body must not be empty"
NUMERIC_FIELDS_MESSAGE = "Title and body must not contain only numbers"

PostCallback = Callable[[Post], None]
PostLookup = Callable[[int], Optional[Post]]


def _only_digits(text: str) -> bool:
    """True if text is made of ASCII 0-9 only."""
    return text.isascii() and text.isdigit()


def validate_post_fields(title: str, description: str) -> None:
    """
    Check form input before anything is sent.

    Raises:
        ValidationError: If a field is blank or consists only of digits.
    """
    title = title.strip()
    description = description.strip()

    if not title or not description:
        raise ValidationError(EMPTY_FIELDS_MESSAGE)
    if _only_digits(title) or _only_digits(description):
        raise ValidationError(NUMERIC_FIELDS_MESSAGE)


class PostForm:
    """
    Shared state and submit flow for the create and update forms.
    """

    def __init__(
        self,
        api: APIClient,
        on_success: PostCallback,
        navigate: Callable[[], None]
    ):
        self.api = api
        self.on_success = on_success
        self.navigate = navigate

        self.title = ""
        self.description = ""
        self.error: Optional[str] = None
        self.submitting = False

    def set_fields(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None
    ) -> None:
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description

    def clear(self) -> None:
        self.title = ""
        self.description = ""
        self.error = None

    async def submit(self) -> Optional[Post]:
        """
        Validate and send the form.

        Returns:
            The stored post on success, None if rejected or failed
            (the reason is left in self.error).
        """
        if self.submitting:
            logger.warning("Submission already in progress, ignoring")
            return None

        try:
            validate_post_fields(self.title, self.description)
        except ValidationError as e:
            logger.info(f"Form rejected: {e}")
            self.error = str(e)
            return None

        self.error = None
        self.submitting = True
        post = Post(
            title=self.title,
            description=self.description,
            user_id=config.api.default_user_id,
        )
        try:
            saved = await self._send(post)
        except PostsManagerError as e:
            logger.error(f"Form submission failed: {e}")
            self.error = str(e)
            return None
        finally:
            self.submitting = False

        self.on_success(saved)
        self.clear()
        self.navigate()
        return saved

    async def _send(self, post: Post) -> Post:
        raise NotImplementedError


class CreatePostForm(PostForm):
    """Form that creates a new post."""

    async def _send(self, post: Post) -> Post:
        return await self.api.create_post(post)


class UpdatePostForm(PostForm):
    """
    Form that edits an existing post.

    The fields are pre-populated from the caller's collection via lookup,
    falling back to the API when the post is not loaded locally.
    """

    def __init__(
        self,
        api: APIClient,
        post_id: int,
        lookup: PostLookup,
        on_success: PostCallback,
        navigate: Callable[[], None]
    ):
        super().__init__(api, on_success, navigate)
        self.post_id = post_id
        self.lookup = lookup

    async def load(self) -> bool:
        """
        Fill the fields with the current values of the post.

        Returns:
            True if the fields were populated.
        """
        post = self.lookup(self.post_id)
        if post is None:
            logger.debug(f"Post {self.post_id} not loaded locally, fetching")
            try:
                post = await self.api.get_post(self.post_id)
            except PostsManagerError as e:
                logger.warning(f"Could not load post {self.post_id} for editing: {e}")
                self.error = str(e)
                return False

        self.set_fields(title=post.title, description=post.description)
        return True

    async def _send(self, post: Post) -> Post:
        return await self.api.update_post(self.post_id, post)
