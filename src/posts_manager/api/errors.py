"""
Error Taxonomy

Every failure the posts manager reports derives from PostsManagerError,
so components can catch one type at their boundary.
"""

from typing import Optional


class PostsManagerError(Exception):
    """Base class for all posts manager errors."""


class ValidationError(PostsManagerError):
    """Input was rejected, either before sending or by the server (4xx)."""


class NotFoundError(PostsManagerError):
    """The requested post does not exist (404)."""

    def __init__(self, message: str, post_id: Optional[int] = None):
        super().__init__(message)
        self.post_id = post_id


class NetworkError(PostsManagerError):
    """The request never produced a response (connection error or timeout)."""


class ServerError(PostsManagerError):
    """The server answered with an unexpected status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfirmationError(PostsManagerError):
    """A destructive action was attempted without a matching confirmation."""
