"""
Redirect Matcher module.
Selects the rule for a request path and applies its query-string match mode.
"""
import logging
from typing import List, Optional

from query_params import parse_params, params_satisfied
from redirect_rule import QueryFlag, RedirectRule
from request_descriptor import RequestDescriptor

logger = logging.getLogger(__name__)


class RedirectDecision:
    """The redirect to send back: a fully formed target URL and status code."""

    def __init__(self, target_url: str, status_code: int):
        self.target_url = target_url
        self.status_code = status_code

    def __eq__(self, other):
        if not isinstance(other, RedirectDecision):
            return NotImplemented
        return self.target_url == other.target_url and self.status_code == other.status_code

    def __repr__(self):
        return f'RedirectDecision({self.status_code} -> {self.target_url!r})'


def match(path: str, rules: List[RedirectRule]) -> Optional[RedirectRule]:
    """
    Find the first rule whose source equals the path exactly.
    Returns None if no rule matches.
    """
    for rule in rules:
        if rule.source == path:
            return rule
    return None


class RedirectMatcher:
    """Turns a request and a rule list into a redirect decision."""

    def __init__(self):
        self._strategies = {
            QueryFlag.PASS: self._pass_match,
            QueryFlag.IGNORE: self._ignore_match,
            QueryFlag.EXACT: self._exact_match,
            QueryFlag.EXACT_ORDER: self._exact_order_match,
        }

    def evaluate(self, request: RequestDescriptor, rules: List[RedirectRule]) -> Optional[RedirectDecision]:
        """
        Decide whether the request should be redirected.

        Args:
            request: The inbound request
            rules: The current redirect rules, in priority order

        Returns:
            The redirect decision, or None to pass the request through
        """
        rule = match(request.path, rules)
        if rule is None:
            return None

        strategy = self._strategies.get(rule.query_flag)
        if strategy is None:
            logger.warning("No match strategy for queryFlag %r on %s", rule.query_flag, rule.source)
            return None

        decision = strategy(rule, request)
        if decision is None:
            logger.debug("Rule %r matched path but not query %r", rule, request.query_search)
        return decision

    def _pass_match(self, rule: RedirectRule, request: RequestDescriptor) -> RedirectDecision:
        """Redirect unconditionally, forwarding the incoming query string."""
        return RedirectDecision(rule.target + request.query_search, rule.status_code)

    def _ignore_match(self, rule: RedirectRule, request: RequestDescriptor) -> RedirectDecision:
        """Redirect unconditionally, dropping the incoming query string."""
        return RedirectDecision(rule.target, rule.status_code)

    def _exact_match(self, rule: RedirectRule, request: RequestDescriptor) -> Optional[RedirectDecision]:
        """
        Redirect when the incoming query contains every parameter of the
        rule's search with the same value, in any order.
        """
        if not rule.search:
            return RedirectDecision(rule.target, rule.status_code)

        required = parse_params(rule.search)
        actual = parse_params(request.query_search)
        if not params_satisfied(required, actual):
            return None

        return RedirectDecision(rule.target + request.query_search, rule.status_code)

    def _exact_order_match(self, rule: RedirectRule, request: RequestDescriptor) -> Optional[RedirectDecision]:
        """Redirect when source + search equals the incoming path and query literally."""
        if not rule.search:
            return RedirectDecision(rule.target, rule.status_code)

        if rule.source + rule.search != request.full_href:
            return None

        return RedirectDecision(rule.target + request.query_search, rule.status_code)
