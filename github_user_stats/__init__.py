"""
GitHub User Statistics Proxy

Aggregates commit, line, repository and follower counts of GitHub users by
fanning out concurrent requests to the GitHub REST API.
"""

__version__ = "1.0.0"

from .aggregator import UserAggregator
from .client import GitHubClient, ResponseError
from .config import GitHubConfig, load_configuration
from .models import FollowersRecord, StatisticsRecord, UserRecord

__all__ = [
    "UserAggregator",
    "GitHubClient",
    "ResponseError",
    "GitHubConfig",
    "load_configuration",
    "FollowersRecord",
    "StatisticsRecord",
    "UserRecord",
]
