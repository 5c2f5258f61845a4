"""
API Client Module

Async HTTP client for the posts REST API. Each call maps the response
status onto the posts manager error taxonomy; there are no retries and
no caching, every failure is reported to the caller.
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

import httpx

from ..config import config
from .errors import (
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationError,
)


logger = logging.getLogger(__name__)


@dataclass
class Post:
    """Represents a post from the API."""
    title: str
    description: str
    user_id: int
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        """
        Build a Post from its JSON representation.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If title or description is not a string.
        """
        title = data["title"]
        description = data["description"]
        if not isinstance(title, str) or not isinstance(description, str):
            raise TypeError("title and description must be strings")

        post_id = data.get("id")
        return cls(
            id=int(post_id) if post_id is not None else None,
            user_id=int(data["userId"]),
            title=title,
            description=description,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create/update: every field except the id."""
        return {
            "title": self.title,
            "description": self.description,
            "userId": self.user_id,
        }

    def format_content(self) -> str:
        """Format the post content for display."""
        return config.display.content_template.format(
            title=self.title,
            description=self.description
        )


class APIClient:
    """
    HTTP client for the posts API.

    Features:
    - Configurable timeout (surfaced as NetworkError)
    - Status codes mapped to typed errors
    - Injectable transport for testing
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root (uses config default if None).
            timeout: Seconds before a request is abandoned (uses config default if None).
            transport: Optional httpx transport, e.g. httpx.MockTransport.
        """
        self.base_url = (base_url or config.api.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.api.timeout_seconds
        self._transport = transport
        logger.info(f"APIClient initialized (base_url: {self.base_url})")

    @property
    def posts_url(self) -> str:
        return f"{self.base_url}{config.api.posts_endpoint}"

    def post_url(self, post_id: int) -> str:
        return f"{self.posts_url}/{post_id}"

    async def list_posts(self, title: Optional[str] = None) -> List[Post]:
        """
        Fetch all posts.

        Args:
            title: Optional server-side title filter.

        Returns:
            List of Post objects in server order.

        Raises:
            NetworkError: If the server could not be reached.
            ServerError: On any non-2xx response or malformed body.
        """
        params = {"title": title} if title is not None else None
        logger.info(f"Fetching posts from {self.posts_url}")

        response = await self._request("GET", self.posts_url, params=params)
        if response.status_code == 204:
            logger.info("Server returned no posts")
            return []
        if not response.is_success:
            raise ServerError(
                f"Listing posts failed with status {response.status_code}",
                status_code=response.status_code
            )

        data = self._json(response)
        if not isinstance(data, list):
            raise ServerError(f"Unexpected API response format: {type(data).__name__}")

        posts = [self._parse_post(item) for item in data]
        logger.info(f"Fetched {len(posts)} posts successfully")
        return posts

    async def get_post(self, post_id: int) -> Post:
        """
        Fetch a single post by id.

        Raises:
            NotFoundError: If the server has no such post.
            NetworkError: If the server could not be reached.
            ServerError: On any other non-2xx response.
        """
        logger.info(f"Fetching post {post_id}")
        response = await self._request("GET", self.post_url(post_id))

        if response.status_code == 404:
            raise NotFoundError(f"Post {post_id} does not exist", post_id=post_id)
        if not response.is_success:
            raise ServerError(
                f"Fetching post {post_id} failed with status {response.status_code}",
                status_code=response.status_code
            )
        return self._parse_post(self._json(response))

    async def create_post(self, post: Post) -> Post:
        """
        Create a post. The id, if any, is not sent.

        Returns:
            The stored post including its server-assigned id.

        Raises:
            ValidationError: On a 4xx response.
            ServerError: On a 5xx response or malformed body.
            NetworkError: If the server could not be reached.
        """
        logger.info(f"Creating post '{post.title}'")
        response = await self._request("POST", self.posts_url, json=post.to_payload())
        self._raise_for_status(response, "Creating post")

        created = self._parse_post(self._json(response))
        logger.info(f"Created post {created.id}")
        return created

    async def update_post(self, post_id: int, post: Post) -> Post:
        """
        Replace the fields of an existing post.

        Returns:
            The post as merged by the server.

        Raises:
            NotFoundError: If the server has no such post.
            ValidationError: On any other 4xx response.
            ServerError: On a 5xx response or malformed body.
            NetworkError: If the server could not be reached.
        """
        logger.info(f"Updating post {post_id}")
        response = await self._request(
            "PUT", self.post_url(post_id), json=post.to_payload()
        )
        self._raise_for_status(response, f"Updating post {post_id}", post_id=post_id)
        return self._parse_post(self._json(response))

    async def delete_post(self, post_id: int) -> None:
        """
        Delete a post. Any response body is ignored.

        Raises:
            NotFoundError: If the server has no such post.
            ValidationError: On any other 4xx response.
            ServerError: On a 5xx response.
            NetworkError: If the server could not be reached.
        """
        logger.info(f"Deleting post {post_id}")
        response = await self._request("DELETE", self.post_url(post_id))
        self._raise_for_status(response, f"Deleting post {post_id}", post_id=post_id)
        logger.info(f"Deleted post {post_id}")

    async def test_connection(self) -> bool:
        """
        Test if the API is reachable.

        Returns:
            True if the posts endpoint answers with a 2xx status.
        """
        try:
            response = await self._request("GET", self.posts_url)
            return response.is_success
        except (NetworkError, ServerError) as e:
            logger.warning(f"API connection test failed: {e}")
            return False

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request, wrapping httpx request failures in the error taxonomy."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                return await client.request(method, url, **kwargs)

        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {self.timeout}s: {method} {url}")
            raise NetworkError(f"Request timed out after {self.timeout}s") from e

        except httpx.DecodingError as e:
            logger.warning(f"Undecodable response body on {method} {url}: {e}")
            raise ServerError(f"Response body could not be decoded: {e}") from e

        except httpx.RequestError as e:
            logger.warning(f"Request error on {method} {url}: {e}")
            raise NetworkError(f"Could not reach the server: {e}") from e

    @staticmethod
    def _raise_for_status(
        response: httpx.Response,
        action: str,
        post_id: Optional[int] = None
    ) -> None:
        """Map a non-2xx status onto the error taxonomy."""
        status = response.status_code
        if response.is_success:
            return
        if status == 404:
            raise NotFoundError(f"{action} failed: post does not exist", post_id=post_id)
        if 400 <= status < 500:
            raise ValidationError(f"{action} was rejected (status {status})")
        raise ServerError(f"{action} failed with status {status}", status_code=status)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                "Response body is not valid JSON",
                status_code=response.status_code
            ) from e

    @staticmethod
    def _parse_post(item: Any) -> Post:
        try:
            return Post.from_dict(item)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ServerError(f"Malformed post in response: {item!r}") from e
