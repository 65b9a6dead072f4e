#!/usr/bin/env python3
"""
Helpers for building GitHub query strings.
"""

from typing import Any, Dict


def dict_to_formatted_string(options: Dict[str, Any], key_value_sep: str = '=', separator: str = '&') -> str:
    """Join a mapping into ``key<sep>value`` pairs, keeping insertion order."""
    return separator.join(f"{key}{key_value_sep}{value}" for key, value in options.items())


def dict_to_search_option(options: Dict[str, Any]) -> str:
    """Format a mapping in the search qualifier dialect, e.g. ``user:octocat+fork:true``."""
    return dict_to_formatted_string(options, ':', '+')
