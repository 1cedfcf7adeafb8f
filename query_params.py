"""
Query Params module.
Parses raw query strings into key/value mappings without URL-decoding.
"""
from typing import Dict, Optional


def parse_params(raw: str) -> Dict[str, Optional[str]]:
    """
    Parse a raw query string into a mapping.

    A single leading '?' is stripped. Tokens are split on '&' and then on
    the first '='. A token without '=' maps to None, which is distinct from
    an empty value ('a=' maps to ''). Later duplicates overwrite earlier ones.

    Args:
        raw: The raw query string, e.g. '?a=1&b=2'

    Returns:
        Dictionary mapping parameter names to their raw values
    """
    if raw.startswith('?'):
        raw = raw[1:]

    params = {}
    for token in raw.split('&'):
        # '&&', a trailing '&' and '' carry no parameter, no '' key is produced
        if not token:
            continue
        if '=' in token:
            key, value = token.split('=', 1)
            params[key] = value
        else:
            params[token] = None
    return params


def params_satisfied(required: Dict[str, Optional[str]], actual: Dict[str, Optional[str]]) -> bool:
    """
    Check that every required key is present in actual with an identical value.

    Extra keys in actual are ignored.
    """
    for key, value in required.items():
        if key not in actual or actual[key] != value:
            return False
    return True
