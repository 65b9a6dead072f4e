#!/usr/bin/env python3
"""
Data models for GitHub user statistics.

Contains the records returned by the aggregator and serialized by the server.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserRecord:
    """Identity fields of a GitHub user listing."""
    login: Optional[str]
    avatar_url: Optional[str]
    id: Optional[int]

    @classmethod
    def from_github_entry(cls, entry: Dict[str, Any]) -> 'UserRecord':
        """Create a UserRecord from a GitHub user listing entry."""
        return cls(entry.get("login"), entry.get("avatar_url"), entry.get("id"))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FollowersRecord:
    """A user's identity together with their follower count."""
    login: str
    avatar_url: str
    id: int
    nb_followers: int = 0

    @classmethod
    def from_user(cls, user: UserRecord, nb_followers: int) -> 'FollowersRecord':
        return cls(user.login, user.avatar_url, user.id, nb_followers)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StatisticsRecord:
    """Aggregated line, commit and repository counts for one user."""
    username: str
    avatar_url: str
    nb_lines: int = 0
    nb_commit: int = 0
    nb_repos: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
