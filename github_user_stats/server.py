#!/usr/bin/env python3
"""
GitHub User Statistics Web Server

A small web server exposing the aggregated GitHub user statistics as a JSON API.
"""

import asyncio
import http.server
import json
import logging
import urllib.parse
from http import HTTPStatus
from typing import Any, Optional

import httpx

from .aggregator import UserAggregator
from .client import GitHubClient
from .config import GitHubConfig

logger = logging.getLogger(__name__)


def run_aggregation(config: GitHubConfig, method: str, *args,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    """Run one aggregator method on a fresh event loop with its own client."""
    async def _run():
        async with GitHubClient(config, transport=transport) as client:
            return await getattr(UserAggregator(client), method)(*args)

    return asyncio.run(_run())


def to_json(data: Any) -> Any:
    if isinstance(data, list):
        return [to_json(item) for item in data]
    if hasattr(data, 'to_dict'):
        return data.to_dict()
    return data


class StatsRequestHandler(http.server.BaseHTTPRequestHandler):
    """A custom request handler serving commits, followers and statistics."""

    config: Optional[GitHubConfig] = None
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _send_json_response(self, data: Any, status: HTTPStatus = HTTPStatus.OK):
        """Send a JSON response with consistent headers."""
        body = json.dumps(to_json(data), indent=2).encode('utf-8')
        self.send_response(status)
        self.send_header("Content-type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_json_error(self, message: str, status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR):
        """Send a JSON error response."""
        self._send_json_response({"success": False, "message": message}, status)

    def _aggregate(self, method: str, *args) -> Any:
        return run_aggregation(self.config, method, *args, transport=self.transport)

    def do_GET(self):
        """Handle GET requests."""
        parsed_path = urllib.parse.urlparse(self.path)
        path = parsed_path.path
        query_params = urllib.parse.parse_qs(parsed_path.query)

        if path == "/commit":
            user = query_params.get('user', [None])[0]
            if user:
                self.send_commits(user)
            else:
                self._send_json_error("Missing 'user' parameter", HTTPStatus.BAD_REQUEST)
        elif path in ("/follower", "/stat"):
            seed = query_params.get('seed', [None])[0]
            if not seed:
                self._send_json_error("Missing 'seed' parameter", HTTPStatus.BAD_REQUEST)
            elif not (seed.isascii() and seed.isdigit()):
                self._send_json_error("'seed' must be a user id", HTTPStatus.BAD_REQUEST)
            elif path == "/follower":
                self.send_followers(int(seed))
            else:
                self.send_stats(int(seed))
        else:
            self.send_not_found(path)

    def send_commits(self, user: str):
        """Send every commit message of a user."""
        logger.info(f"asking GitHub commits of: {user}")
        try:
            commits = self._aggregate('commits_of', user)
        except Exception as e:
            logger.error(f"Failed to retrieve commits of {user}: {e}")
            self._send_json_error(f"GitHub error: {str(e)}")
            return
        self._send_json_response(commits)
        logger.info("commits sent back to client")

    def send_followers(self, seed: int):
        """Send a batch of users with their follower counts."""
        logger.info(f"asking GitHub users with starting seed: {seed}")
        try:
            followers = self._aggregate('followers', seed)
        except Exception as e:
            logger.error(f"Failed to retrieve followers since {seed}: {e}")
            self._send_json_error(f"GitHub error: {str(e)}")
            return
        self._send_json_response(followers)
        logger.info("users sent back to client")

    def send_stats(self, seed: int):
        """Send line, commit and repository counts for a batch of users."""
        logger.info(f"asking GitHub statistics with starting seed: {seed}")
        try:
            stats = self._aggregate('stats', seed)
        except Exception as e:
            logger.error(f"Failed to retrieve statistics since {seed}: {e}")
            self._send_json_error(f"GitHub error: {str(e)}")
            return
        self._send_json_response(stats)
        logger.info("statistics sent back to client")

    def send_not_found(self, path: str):
        """Answer an unknown route with a 404."""
        logger.info(f"{path} pathname not found")
        body = f"{path} pathname not found".encode('utf-8')
        self.send_response(HTTPStatus.NOT_FOUND)
        self.send_header("Content-type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.debug(format % args)


def make_handler(config: GitHubConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
    """Build a request handler class bound to a configuration."""
    return type(
        "BoundStatsRequestHandler",
        (StatsRequestHandler,),
        {"config": config, "transport": transport},
    )


def run_server(config: GitHubConfig, port: int = 8000):
    """
    Run the statistics web server.

    Args:
        config: GitHub configuration shared by every request
        port: Port to listen on (default: 8000)
    """
    with http.server.HTTPServer(("", port), make_handler(config)) as httpd:
        logger.info(f"Starting server on port {port}")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped by user")
