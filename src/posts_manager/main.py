"""
Main Application Module

Wires the posts manager together:

1. One API client shared by every component
2. The list manager, which owns the post collection
3. The detail viewer
4. Create and update forms, built on demand and connected to the
   list manager's mutation paths

Routing itself is left to the host; the application only records the
current route and exposes navigate() for the components to call.
"""

import logging
import sys
from typing import Optional

from .config import config
from .api import APIClient, Post
from .views import (
    CreatePostForm,
    DetailViewer,
    PostListManager,
    UpdatePostForm,
)


LIST_ROUTE = "/"
ADD_ROUTE = "/add"
DETAIL_ROUTE_PREFIX = "/posts/"
UPDATE_ROUTE_PREFIX = "/update/"


# Configure logging
def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Set up logging for the application."""
    log_level = log_level or config.log.log_level

    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("posts_manager")
    level = getattr(logging, log_level.upper())
    logger.setLevel(level)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='a',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(config.log.log_format))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


class PostsManagerApp:
    """
    Composition root for the posts manager.

    This class owns the shared components and builds the forms so that
    each form receives the list manager's lookup and mutation callbacks
    explicitly.
    """

    def __init__(self, api: Optional[APIClient] = None):
        """Initialize the application."""
        self.logger = logging.getLogger("posts_manager.main")
        self.api = api or APIClient()
        self.posts = PostListManager(self.api)
        self.detail = DetailViewer(self.api)
        self.route = LIST_ROUTE

        self.logger.info("PostsManagerApp initialized")

    async def start(self) -> bool:
        """Load the post list. Returns False if loading failed."""
        self.navigate(LIST_ROUTE)
        return await self.posts.load()

    def navigate(self, route: str = LIST_ROUTE) -> None:
        self.logger.debug(f"Navigating to {route}")
        self.route = route

    @property
    def is_details_page(self) -> bool:
        """True on screens that offer a back button instead of the title."""
        return self.route.startswith((DETAIL_ROUTE_PREFIX, ADD_ROUTE, UPDATE_ROUTE_PREFIX))

    async def open_detail(self, post_id: int) -> Optional[Post]:
        self.navigate(f"{DETAIL_ROUTE_PREFIX}{post_id}")
        return await self.detail.show(post_id)

    def open_create_form(self) -> CreatePostForm:
        self.navigate(ADD_ROUTE)
        return CreatePostForm(
            self.api,
            on_success=self.posts.add_post,
            navigate=self.navigate,
        )

    async def open_update_form(self, post_id: int) -> UpdatePostForm:
        """Build the update form for post_id and pre-populate its fields."""
        self.navigate(f"{UPDATE_ROUTE_PREFIX}{post_id}")
        form = UpdatePostForm(
            self.api,
            post_id,
            lookup=self.posts.find_post,
            on_success=self.posts.apply_update,
            navigate=self.navigate,
        )
        await form.load()
        return form
