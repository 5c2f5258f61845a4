"""
API Client Module

Provides the async HTTP client for the posts REST API and its error types.
"""

from .client import APIClient, Post
from .errors import (
    ConfirmationError,
    NetworkError,
    NotFoundError,
    PostsManagerError,
    ServerError,
    ValidationError,
)

__all__ = [
    "APIClient",
    "Post",
    "PostsManagerError",
    "ValidationError",
    "NotFoundError",
    "NetworkError",
    "ServerError",
    "ConfirmationError",
]
