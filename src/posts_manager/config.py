"""
Configuration constants for the Posts Manager.

This module centralizes all configurable parameters to make the client
easy to point at a different API and to tune its presentation.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field


DEFAULT_BASE_URL = "http://localhost:9098/api"


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = field(
        default_factory=lambda: os.environ.get("POSTS_API_BASE_URL", DEFAULT_BASE_URL)
    )
    posts_endpoint: str = "/posts"
    timeout_seconds: float = 10.0
    default_user_id: int = 1  # Owner of every post created by this client


@dataclass
class DisplayConfig:
    """List, detail and notification presentation settings."""
    page_size: int = 10
    toast_duration_seconds: float = 3.0

    # Text rendering of a single post
    content_template: str = "Title: {title}\n\n{description}"


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "posts_manager.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
