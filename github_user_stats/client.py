#!/usr/bin/env python3
"""
Asynchronous client for the GitHub REST API.

Every call is a single authenticated GET. Non-success responses are turned into
``ResponseError`` so callers can decide whether a failure is worth degrading.
"""

import logging
import urllib.parse
from typing import Any, Dict, Optional, Union

import httpx

from .config import GitHubConfig
from .utils import dict_to_formatted_string

# The commit search endpoint is only served under the cloak preview media type
ACCEPT_HEADER = "application/vnd.github.cloak-preview+json, application/vnd.github.v3+json"


class ResponseError(Exception):
    """Raised when GitHub answers with a non-success status."""

    def __init__(self, response: httpx.Response, body: Any):
        super().__init__(f"{response.status_code} error requesting {response.url}: {response.reason_phrase}")
        self.status = response.status_code
        self.path = str(response.url)
        self.body = body


class GitHubClient:
    """Thin async wrapper around ``httpx.AsyncClient`` holding the token and base URL."""

    def __init__(self, config: GitHubConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the client.

        Args:
            config: Frozen configuration carrying the token and base URL
            transport: Optional httpx transport, mainly for tests
        """
        self.config = config
        self.base_url = config.base_url
        self.logger = logging.getLogger(__name__)
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {config.token}",
                "Accept": ACCEPT_HEADER,
            },
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> 'GitHubClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def build_url(self, path: str, search_opt: Optional[Dict[str, Any]] = None) -> str:
        """Concatenate the base URL, the path and the formatted query string."""
        url = f"{self.base_url}{path}"
        if search_opt:
            # Search qualifiers rely on raw ":" and "+"
            encoded = {key: urllib.parse.quote(str(value), safe=":+") for key, value in search_opt.items()}
            url = f"{url}?{dict_to_formatted_string(encoded)}"
        return url

    def relative_path(self, url: str) -> str:
        """Strip the base URL from a URL handed back by the API."""
        if url.startswith(self.base_url):
            return url[len(self.base_url):]
        return url

    async def request(self, path: str, search_opt: Optional[Dict[str, Any]] = None,
                      only_headers: bool = False, **opts) -> Union[Any, httpx.Headers]:
        """
        Send a GET request to the given path.

        Args:
            path: API path, e.g. ``/users``
            search_opt: Query parameters, formatted as ``key=value&...``
            only_headers: Return the response headers instead of the body
            **opts: Extra ``httpx`` request options; ``headers`` are merged over the defaults

        Returns:
            The decoded JSON body (None for an empty body), or the headers.

        Raises:
            ResponseError: GitHub answered with a non-2xx status
            httpx.HTTPError: The request could not be completed
        """
        url = self.build_url(path, search_opt)
        self.logger.debug(f"GET {url}")
        response = await self._client.get(url, **opts)

        if not response.is_success:
            raise ResponseError(response, self._decode_error_body(response))
        if only_headers:
            return response.headers
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _decode_error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text
