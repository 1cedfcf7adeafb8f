"""
Redirect Rule module.
Represents a single redirect rule fetched from the rule source and decodes
rules from their JSON representation.
"""
import logging
from enum import Enum
from typing import Any, List, Optional

from errors import MalformedRuleData, UnrecognizedQueryFlag

logger = logging.getLogger(__name__)

REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 304, 307, 308})


class QueryFlag(str, Enum):
    """Match mode controlling how the query string is compared and forwarded."""

    PASS = 'pass'
    IGNORE = 'ignore'
    EXACT = 'exact'
    EXACT_ORDER = 'exactorder'


class RedirectRule:
    """Represents a redirect from one exact source path to a target URL."""

    __slots__ = ('source', 'target', 'search', 'status_code', 'query_flag')

    def __init__(self, source: str, target: str, status_code: int,
                 query_flag: QueryFlag, search: Optional[str] = None):
        """
        Initialize a redirect rule.

        Args:
            source: The exact path this rule is keyed on
            target: The destination URL or path
            status_code: One of the redirect status codes
            query_flag: The match mode for the query string
            search: Optional literal query-string constraint, e.g. '?a=1&b=2'
        """
        object.__setattr__(self, 'source', source)
        object.__setattr__(self, 'target', target)
        object.__setattr__(self, 'status_code', status_code)
        object.__setattr__(self, 'query_flag', QueryFlag(query_flag))
        object.__setattr__(self, 'search', search or None)

    def __setattr__(self, name, value):
        raise AttributeError(f"RedirectRule is immutable, cannot set {name!r}")

    def __eq__(self, other):
        if not isinstance(other, RedirectRule):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.__slots__))

    def __repr__(self):
        search_str = f', search={self.search!r}' if self.search else ''
        return (f'RedirectRule({self.source!r} -> {self.target!r}, '
                f'{self.status_code}, {self.query_flag.value}{search_str})')


def parse_redirect_rule(data: Any) -> RedirectRule:
    """
    Decode one rule object as served by the rule source.

    Args:
        data: A decoded JSON object with source, target, search, statusCode
              and queryFlag keys

    Returns:
        The decoded RedirectRule

    Raises:
        UnrecognizedQueryFlag: If queryFlag is not a known match mode
        MalformedRuleData: If any other field is missing or invalid
    """
    if not isinstance(data, dict):
        raise MalformedRuleData(f"Rule must be an object, got {type(data).__name__}")

    source = data.get('source')
    if not isinstance(source, str) or not source:
        raise MalformedRuleData(f"Rule source must be a non-empty string, got {source!r}")

    target = data.get('target')
    if not isinstance(target, str):
        raise MalformedRuleData(f"Rule target must be a string, got {target!r}")

    search = data.get('search')
    if search is not None and not isinstance(search, str):
        raise MalformedRuleData(f"Rule search must be a string, got {search!r}")

    status_code = data.get('statusCode')
    # bool is a subclass of int
    if (not isinstance(status_code, int) or isinstance(status_code, bool)
            or status_code not in REDIRECT_STATUS_CODES):
        raise MalformedRuleData(f"Rule statusCode must be a redirect status, got {status_code!r}")

    query_flag = data.get('queryFlag')
    try:
        query_flag = QueryFlag(query_flag)
    except ValueError:
        raise UnrecognizedQueryFlag(query_flag) from None

    return RedirectRule(source, target, status_code, query_flag, search=search)


def parse_redirect_rules(payload: Any) -> List[RedirectRule]:
    """
    Decode the full rule list, dropping entries that fail validation.

    Args:
        payload: The decoded JSON body of the rule source

    Returns:
        List of valid rules in their original order

    Raises:
        MalformedRuleData: If the payload is not a JSON array
    """
    if not isinstance(payload, list):
        raise MalformedRuleData(f"Rule list must be an array, got {type(payload).__name__}")

    rules = []
    for index, item in enumerate(payload):
        try:
            rules.append(parse_redirect_rule(item))
        except MalformedRuleData as e:
            logger.warning("Dropping redirect rule #%d: %s", index, e)
    return rules
