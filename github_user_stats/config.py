#!/usr/bin/env python3
"""
Configuration for the GitHub user statistics proxy.

Settings are read once from environment variables and frozen, so a single
configuration object can be shared by every request.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://api.github.com"
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class GitHubConfig:
    """Immutable settings for talking to the GitHub REST API."""
    token: str
    base_url: str = DEFAULT_BASE_URL
    # None disables the client-side timeout
    timeout: Optional[float] = None
    users_per_batch: int = 5
    repos_per_page: int = 30
    commits_per_page: int = 100

    def __post_init__(self):
        if not self.token:
            raise ValueError("GitHub token must not be empty.")
        # The search and listing endpoints refuse pages larger than 100 items
        for name in ("users_per_batch", "repos_per_page", "commits_per_page"):
            value = getattr(self, name)
            if not 1 <= value <= MAX_PER_PAGE:
                raise ValueError(f"{name} must be between 1 and {MAX_PER_PAGE}, got {value}.")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}.")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}.")


def load_configuration() -> GitHubConfig:
    """Load configuration from environment variables."""
    github_token = os.environ.get('GITHUB_TOKEN')
    if not github_token:
        raise ValueError("GITHUB_TOKEN environment variable not set.")

    timeout = os.environ.get('GITHUB_TIMEOUT')
    try:
        timeout = float(timeout) if timeout else None
    except ValueError:
        raise ValueError(f"GITHUB_TIMEOUT must be a number, got {timeout!r}.")

    return GitHubConfig(
        token=github_token,
        base_url=os.environ.get('GITHUB_API_URL', DEFAULT_BASE_URL),
        timeout=timeout,
        users_per_batch=_int_env('GITHUB_USERS_PER_BATCH', 5),
        repos_per_page=_int_env('GITHUB_REPOS_PER_PAGE', 30),
    )


def get_server_port(default: int = 8000) -> int:
    """Port the HTTP front door listens on."""
    return _int_env('PORT', default)
