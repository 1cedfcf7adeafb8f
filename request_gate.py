"""
Request Gate module.
Decides whether a request path is eligible for redirect processing.
"""
import re
from typing import Iterable

# Trailing '.<extension>' marks a static asset, e.g. /logo.png
PUBLIC_FILE = re.compile(r'\.[a-zA-Z0-9]+$')

DEFAULT_API_PREFIXES = ('/api/',)


def is_eligible(path: str, api_prefixes: Iterable[str] = DEFAULT_API_PREFIXES) -> bool:
    """
    Check whether a path should be looked up in the redirect rules.

    Args:
        path: The request path without query string
        api_prefixes: Reserved path prefixes that are never redirected

    Returns:
        False for static-file-like paths and API paths, True otherwise
    """
    if PUBLIC_FILE.search(path):
        return False

    for prefix in api_prefixes:
        if path.startswith(prefix):
            return False

    return True
