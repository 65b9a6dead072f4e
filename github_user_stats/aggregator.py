#!/usr/bin/env python3
"""
GitHub user statistics aggregation.

Fans out the GitHub requests needed for a batch of users and folds the results
into one record per user. Any failure below a single statistic is degraded to a
zero so that one user, or one repository, can never abort the whole batch.
"""

import asyncio
import math
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from .client import GitHubClient
from .models import FollowersRecord, StatisticsRecord, UserRecord
from .pagination import last_page_from_link
from .utils import dict_to_search_option

# GitHub search only ever returns the first 1000 results of a query
SEARCH_RESULT_LIMIT = 1000


class UserAggregator:
    """Computes per-user statistics on top of a shared ``GitHubClient``."""

    def __init__(self, client: GitHubClient):
        """
        Initialize the aggregator.

        Args:
            client: Open GitHub client; its configuration drives page sizes
        """
        self.client = client
        self.config = client.config
        self.logger = logging.getLogger(__name__)

    async def list_users(self, since: Any) -> List[Dict[str, Any]]:
        """Request one batch of users whose id comes after ``since``."""
        return await self.client.request(
            '/users', {'since': since, 'page': 1, 'per_page': self.config.users_per_batch}
        )

    async def user_info(self, since: Any, info: Sequence[str] = ('login',)) -> List[Dict[str, Any]]:
        """
        List a batch of users, keeping only the requested fields.

        Args:
            since: Id of the user before the first one we want
            info: Names of the fields to keep

        Returns:
            One dictionary per user, holding exactly the keys in ``info``.
        """
        users = await self.list_users(since)
        return [{field: user.get(field) for field in info} for user in users]

    async def followers(self, since: Any) -> List[FollowersRecord]:
        """List a batch of users along with their follower counts."""
        users = await self.list_users(since)
        identities = [UserRecord.from_github_entry(user) for user in users]

        results = await asyncio.gather(
            *(self._followers_headers(user) for user in users),
            return_exceptions=True,
        )

        records = []
        for identity, result in zip(identities, results):
            if isinstance(result, Exception):
                self.logger.warning(f"Failed to count followers of {identity.login}: {result}")
                nb_followers = 0
            else:
                nb_followers = last_page_from_link(result.get('Link'))
            records.append(FollowersRecord.from_user(identity, nb_followers))
        return records

    async def _followers_headers(self, user: Dict[str, Any]):
        # One follower per page: the last page number is the follower count
        path = self.client.relative_path(user['followers_url'])
        return await self.client.request(path, {'per_page': 1}, only_headers=True)

    async def _search_repositories(self, user: str, page: int = 1) -> Dict[str, Any]:
        search_options = {
            'q': dict_to_search_option({'user': user, 'fork': 'true'}),
            'page': page,
            'per_page': self.config.repos_per_page,
        }
        return await self.client.request('/search/repositories', search_options)

    async def repositories_of(self, user: str, page: int = 1) -> Optional[Dict[str, Any]]:
        """
        Search the repositories of a user, forks included.

        Returns None when the search fails, which GitHub does repeatedly for
        users without visible public repositories.
        """
        try:
            return await self._search_repositories(user, page)
        except Exception as e:
            self.logger.warning(f"Failed to search repositories of {user}: {e}")
            return None

    async def nb_repositories_of(self, user: str) -> int:
        """Number of repositories of a user, 0 if they cannot be listed."""
        repos = await self.repositories_of(user)
        if not repos:
            return 0
        return repos.get('total_count', 0)

    async def iter_commit_pages(self, user: str) -> AsyncIterator[List[str]]:
        """
        Yield the commit messages of a user one search page at a time.

        Stops quietly at the first page that fails, is empty, or is short.
        """
        per_page = self.config.commits_per_page
        query = dict_to_search_option({'author': user})
        page = 1
        while True:
            try:
                commits = await self.client.request(
                    '/search/commits', {'page': page, 'per_page': per_page, 'q': query}
                )
            except Exception as e:
                self.logger.warning(f"Stopping commit pagination of {user} at page {page}: {e}")
                return

            items = (commits or {}).get('items') or []
            if not items:
                return
            yield [item['commit']['message'] for item in items]

            if len(items) < per_page:
                return
            page += 1

    async def commits_of(self, user: str) -> List[str]:
        """Collect every commit message of a user, in page order."""
        commit_msg = []
        async for messages in self.iter_commit_pages(user):
            commit_msg.extend(messages)
        return commit_msg

    async def nb_commits_of(self, user: str) -> int:
        """Total number of commits authored by a user, 0 on failure."""
        search_options = {'q': dict_to_search_option({'author': user})}
        try:
            commits = await self.client.request('/search/commits', search_options)
        except Exception as e:
            self.logger.warning(f"Failed to count commits of {user}: {e}")
            return 0
        return (commits or {}).get('total_count', 0)

    async def _all_repositories_of(self, user: str) -> List[Dict[str, Any]]:
        per_page = self.config.repos_per_page
        first = await self._search_repositories(user, 1)
        repos = list(first.get('items') or [])

        total = min(first.get('total_count', 0), SEARCH_RESULT_LIMIT)
        last_page = math.ceil(total / per_page)
        remaining = await asyncio.gather(
            *(self._search_repositories(user, page) for page in range(2, last_page + 1))
        )
        for result in remaining:
            repos.extend(result.get('items') or [])
        return repos

    async def _lines_in_repository(self, repo: Dict[str, Any], page: int) -> int:
        try:
            contributors = await self.client.request(
                f"/repos/{repo['full_name']}/stats/contributors", {'page': page}
            )
        except Exception as e:
            self.logger.warning(f"Failed to get contributors of {repo.get('full_name')}: {e}")
            return 0

        # GitHub answers 202 with an empty object while it computes the statistics
        if not isinstance(contributors, list):
            return 0
        return sum(
            week.get('a', 0)
            for contributor in contributors
            for week in contributor.get('weeks') or []
        )

    async def nb_lines_of(self, user: str) -> int:
        """
        Number of lines added across every repository of a user.

        Sums the weekly additions of every contributor of every repository. A
        repository whose statistics cannot be fetched counts as 0 lines.
        """
        try:
            repos = await self._all_repositories_of(user)
        except Exception as e:
            self.logger.warning(f"Failed to list repositories of {user}: {e}")
            return 0

        per_page = self.config.repos_per_page
        lines = await asyncio.gather(
            *(self._lines_in_repository(repo, index // per_page + 1) for index, repo in enumerate(repos))
        )
        return sum(lines)

    async def _stats_of(self, username: str, avatar_url: str) -> StatisticsRecord:
        nb_lines, nb_commit, nb_repos = await asyncio.gather(
            self.nb_lines_of(username),
            self.nb_commits_of(username),
            self.nb_repositories_of(username),
        )
        return StatisticsRecord(username, avatar_url, nb_lines, nb_commit, nb_repos)

    async def stats(self, since: Any) -> List[StatisticsRecord]:
        """
        Line, commit and repository counts for a batch of users.

        Returns an empty list, after logging, when the batch itself cannot be listed.
        """
        try:
            name_and_avatar = await self.user_info(since, ['login', 'avatar_url'])
        except Exception as e:
            self.logger.error(f"Failed to list users since {since}: {e}")
            return []

        return list(await asyncio.gather(
            *(self._stats_of(user['login'], user['avatar_url']) for user in name_and_avatar)
        ))
