#!/usr/bin/env python3
"""
Main entry point for the github-user-stats server.
"""

import logging
import sys

from github_user_stats.config import get_server_port, load_configuration
from github_user_stats.server import run_server

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    try:
        config = load_configuration()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    run_server(config, port=get_server_port())
