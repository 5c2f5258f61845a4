"""
Tests for the API Client

Wire-level tests against httpx.MockTransport: request shapes,
response parsing and the mapping of failures onto error types.
"""

import json
import pytest
import sys
from pathlib import Path

import httpx

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from posts_manager.api.client import APIClient, Post
from posts_manager.api.errors import (
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationError,
)


BASE_URL = "http://test-api/api"


def make_client(handler) -> APIClient:
    """Create an APIClient whose requests are answered by handler."""
    return APIClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class InMemoryPostsServer:
    """Minimal CRUD server with auto-assigned ids."""

    def __init__(self):
        self.posts = {}
        self.next_id = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        parts = request.url.path.rstrip("/").split("/")
        post_id = int(parts[-1]) if parts[-1].isdigit() else None

        if request.method == "GET" and post_id is None:
            return httpx.Response(200, json=list(self.posts.values()))
        if request.method == "POST":
            body = json.loads(request.content)
            stored = {"id": self.next_id, **body}
            self.posts[self.next_id] = stored
            self.next_id += 1
            return httpx.Response(201, json=stored)
        if post_id not in self.posts:
            return httpx.Response(404)
        if request.method == "GET":
            return httpx.Response(200, json=self.posts[post_id])
        if request.method == "PUT":
            self.posts[post_id] = {"id": post_id, **json.loads(request.content)}
            return httpx.Response(200, json=self.posts[post_id])
        if request.method == "DELETE":
            del self.posts[post_id]
            return httpx.Response(200)
        return httpx.Response(405)


class TestPost:
    """Tests for the Post model."""

    def test_from_dict(self):
        post = Post.from_dict(
            {"id": 3, "title": "Hello", "description": "World", "userId": 1}
        )

        assert post == Post(id=3, title="Hello", description="World", user_id=1)

    def test_from_dict_without_id(self):
        post = Post.from_dict({"title": "Hello", "description": "World", "userId": 1})

        assert post.id is None

    def test_from_dict_rejects_non_string_fields(self):
        with pytest.raises(TypeError):
            Post.from_dict({"id": 1, "title": None, "description": "Body", "userId": 1})

    def test_payload_excludes_id(self):
        post = Post(id=7, title="T", description="D", user_id=1)

        assert post.to_payload() == {"title": "T", "description": "D", "userId": 1}

    def test_format_content(self):
        post = Post(id=1, title="Test Title", description="Test body content", user_id=1)

        content = post.format_content()

        assert "Title: Test Title" in content
        assert "Test body content" in content


class TestAPIClient:
    """Tests for API client requests and responses."""

    def test_initialization_strips_trailing_slash(self):
        client = APIClient(base_url="http://test-api/api/")

        assert client.base_url == "http://test-api/api"
        assert client.posts_url == "http://test-api/api/posts"

    @pytest.mark.asyncio
    async def test_list_posts(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[
                {"id": 1, "title": "Test Post", "description": "Body", "userId": 1},
            ])

        posts = await make_client(handler).list_posts()

        assert posts == [Post(id=1, title="Test Post", description="Body", user_id=1)]
        assert seen[0].method == "GET"
        assert str(seen[0].url) == f"{BASE_URL}/posts"

    @pytest.mark.asyncio
    async def test_list_posts_sends_title_filter(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await make_client(handler).list_posts(title="foo")

        assert seen[0].url.params["title"] == "foo"

    @pytest.mark.asyncio
    async def test_list_posts_no_content(self):
        posts = await make_client(lambda request: httpx.Response(204)).list_posts()

        assert posts == []

    @pytest.mark.asyncio
    async def test_list_posts_server_error(self):
        with pytest.raises(ServerError) as excinfo:
            await make_client(lambda request: httpx.Response(500)).list_posts()

        assert excinfo.value.status_code == 500

    @pytest.mark.asyncio
    async def test_list_posts_unexpected_format(self):
        handler = lambda request: httpx.Response(200, json={"posts": []})

        with pytest.raises(ServerError):
            await make_client(handler).list_posts()

    @pytest.mark.asyncio
    async def test_get_post(self):
        handler = lambda request: httpx.Response(
            200, json={"id": 1, "title": "Test Post", "description": "Body", "userId": 1}
        )

        post = await make_client(handler).get_post(1)

        assert post.id == 1
        assert post.title == "Test Post"

    @pytest.mark.asyncio
    async def test_get_post_not_found(self):
        with pytest.raises(NotFoundError) as excinfo:
            await make_client(lambda request: httpx.Response(404)).get_post(999)

        assert excinfo.value.post_id == 999

    @pytest.mark.asyncio
    async def test_get_post_malformed_body(self):
        handler = lambda request: httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(ServerError):
            await make_client(handler).get_post(1)

    @pytest.mark.asyncio
    async def test_create_post_sends_payload_without_id(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(201, json={"id": 101, **seen[0]})

        created = await make_client(handler).create_post(
            Post(title="New", description="Content", user_id=1)
        )

        assert seen[0] == {"title": "New", "description": "Content", "userId": 1}
        assert created.id == 101

    @pytest.mark.asyncio
    async def test_create_post_rejected(self):
        with pytest.raises(ValidationError):
            await make_client(lambda request: httpx.Response(400)).create_post(
                Post(title="New", description="Content", user_id=1)
            )

    @pytest.mark.asyncio
    async def test_create_post_server_error(self):
        with pytest.raises(ServerError):
            await make_client(lambda request: httpx.Response(503)).create_post(
                Post(title="New", description="Content", user_id=1)
            )

    @pytest.mark.asyncio
    async def test_update_post(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": 1, **json.loads(request.content)})

        updated = await make_client(handler).update_post(
            1, Post(title="Updated", description="Updated body", user_id=1)
        )

        assert seen[0].method == "PUT"
        assert str(seen[0].url) == f"{BASE_URL}/posts/1"
        assert updated == Post(id=1, title="Updated", description="Updated body", user_id=1)

    @pytest.mark.asyncio
    async def test_update_post_not_found(self):
        with pytest.raises(NotFoundError):
            await make_client(lambda request: httpx.Response(404)).update_post(
                5, Post(title="T", description="D", user_id=1)
            )

    @pytest.mark.asyncio
    async def test_delete_post(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        result = await make_client(handler).delete_post(1)

        assert result is None
        assert seen[0].method == "DELETE"
        assert str(seen[0].url) == f"{BASE_URL}/posts/1"

    @pytest.mark.asyncio
    async def test_delete_post_not_found(self):
        with pytest.raises(NotFoundError):
            await make_client(lambda request: httpx.Response(404)).delete_post(1)

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(NetworkError):
            await make_client(handler).list_posts()

    @pytest.mark.asyncio
    async def test_connection_error_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError):
            await make_client(handler).get_post(1)

    @pytest.mark.asyncio
    async def test_corrupt_encoded_body_is_server_error(self):
        handler = lambda request: httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"
        )

        with pytest.raises(ServerError):
            await make_client(handler).get_post(1)

    @pytest.mark.asyncio
    async def test_null_title_is_server_error(self):
        handler = lambda request: httpx.Response(
            200, json={"id": 1, "title": None, "description": "Body", "userId": 1}
        )

        with pytest.raises(ServerError):
            await make_client(handler).get_post(1)

    @pytest.mark.asyncio
    async def test_connection_with_corrupt_body(self):
        handler = lambda request: httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"
        )

        assert await make_client(handler).test_connection() is False

    @pytest.mark.asyncio
    async def test_connection(self):
        assert await make_client(lambda request: httpx.Response(200, json=[])).test_connection()

    @pytest.mark.asyncio
    async def test_connection_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert await make_client(handler).test_connection() is False


class TestRoundTrip:
    """Create followed by fetch against an in-memory server."""

    @pytest.mark.asyncio
    async def test_create_then_get(self):
        client = make_client(InMemoryPostsServer())

        created = await client.create_post(
            Post(title="Unicode: café résumé", description="Emoji: 🎉", user_id=1)
        )
        fetched = await client.get_post(created.id)

        assert fetched == created
        assert fetched.title == "Unicode: café résumé"

    @pytest.mark.asyncio
    async def test_create_update_delete(self):
        client = make_client(InMemoryPostsServer())

        created = await client.create_post(Post(title="A", description="B", user_id=1))
        await client.update_post(created.id, Post(title="A2", description="B2", user_id=1))
        assert (await client.list_posts())[0].title == "A2"

        await client.delete_post(created.id)

        assert await client.list_posts() == []
        with pytest.raises(NotFoundError):
            await client.get_post(created.id)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
