import httpx
import pytest

from github_user_stats.aggregator import UserAggregator
from github_user_stats.client import GitHubClient
from github_user_stats.config import GitHubConfig

from tests.helpers import BASE_URL


@pytest.fixture
def config():
    return GitHubConfig(token="secret-token", base_url=BASE_URL)


@pytest.fixture
def make_client(config):
    """Build a GitHubClient whose traffic goes to ``handler`` instead of the network."""
    def _make(handler, cfg=None):
        return GitHubClient(cfg or config, transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def make_aggregator(make_client):
    def _make(handler, cfg=None):
        return UserAggregator(make_client(handler, cfg))
    return _make
