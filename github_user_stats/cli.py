#!/usr/bin/env python3
"""
Command-line interface for github-user-stats.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from .config import get_server_port, load_configuration


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="github-user-stats",
        description="Aggregate GitHub user statistics"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    server_parser = subparsers.add_parser("server", help="Start the JSON API server")
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the server on (default: $PORT or 8000)"
    )

    stats_parser = subparsers.add_parser("stats", help="Print line, commit and repository counts for a batch of users")
    stats_parser.add_argument("--seed", required=True, help="Id of the user before the batch")

    followers_parser = subparsers.add_parser("followers", help="Print follower counts for a batch of users")
    followers_parser.add_argument("--seed", required=True, help="Id of the user before the batch")

    commits_parser = subparsers.add_parser("commits", help="Print every commit message of a user")
    commits_parser.add_argument("--user", required=True, help="GitHub login of the commit author")

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_configuration()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.command == "server":
        from .server import run_server
        port = args.port if args.port is not None else get_server_port()
        try:
            run_server(config, port=port)
            return 0
        except KeyboardInterrupt:
            print("\nServer stopped by user")
            return 0
        except Exception as e:
            print(f"Server error: {e}", file=sys.stderr)
            return 1

    from .server import run_aggregation, to_json
    if args.command == "stats":
        result = run_aggregation(config, 'stats', args.seed)
    elif args.command == "followers":
        result = run_aggregation(config, 'followers', args.seed)
    else:
        result = run_aggregation(config, 'commits_of', args.user)

    print(json.dumps(to_json(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
