#!/usr/bin/env python3
"""
Link header pagination.

Some GitHub collections never report a total, so we ask for a single item per
page and read the page number of the ``rel="last"`` link instead.
"""

import urllib.parse
from typing import Optional

from requests.utils import parse_header_links


def last_page_from_link(link_header: Optional[str]) -> int:
    """
    Return the ``page`` query parameter of the ``rel="last"`` link.

    Args:
        link_header: Raw value of the ``Link`` response header (may be None)

    Returns:
        The last page number, or 0 when there is no ``last`` relation.
    """
    if not link_header:
        return 0

    for link in parse_header_links(link_header):
        if link.get('rel') != 'last':
            continue
        query = urllib.parse.urlparse(link.get('url', '')).query
        pages = urllib.parse.parse_qs(query).get('page')
        if pages:
            return int(pages[0])
    return 0
