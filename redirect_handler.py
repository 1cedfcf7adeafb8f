"""
Redirect Handler module.
Runs the redirect pipeline for one inbound request and fails open on errors.
"""
import logging
from typing import Optional

from flask import Request, Response

from config import Config
from errors import FetchFailure, RedirectError
from redirect_matcher import RedirectDecision, RedirectMatcher
from redirect_response import build_redirect_response
from request_descriptor import RequestDescriptor
from request_gate import is_eligible

logger = logging.getLogger(__name__)


class RedirectHandler:
    """Gates, fetches rules, matches and builds the redirect response."""

    def __init__(self, config: Config, rule_source, matcher: Optional[RedirectMatcher] = None):
        """
        Initialize the redirect handler.

        Args:
            config: The configuration object
            rule_source: Any object with a fetch_redirect_rules() method
            matcher: The matcher to use (a default one is created if omitted)
        """
        self.config = config
        self.rule_source = rule_source
        self.matcher = matcher or RedirectMatcher()

    def resolve(self, descriptor: RequestDescriptor) -> Optional[RedirectDecision]:
        """
        Compute the redirect decision for a request.

        Never raises: fetch failures, malformed rule data and unexpected
        errors are logged and treated as "no rules available".

        Args:
            descriptor: The inbound request

        Returns:
            The redirect decision, or None to pass the request through
        """
        if not is_eligible(descriptor.path, self.config.get_api_prefixes()):
            return None

        try:
            rules = self.rule_source.fetch_redirect_rules()
            return self.matcher.evaluate(descriptor, rules)
        except FetchFailure as e:
            logger.error("Could not fetch redirects: %s", e)
        except RedirectError as e:
            logger.error("Could not read redirects: %s", e)
        except Exception:
            logger.exception("Unexpected error while resolving redirect for %s", descriptor.path)
        return None

    def handle(self, request: Request) -> Optional[Response]:
        """
        Handle an inbound Flask request.

        Args:
            request: The incoming Flask request

        Returns:
            A redirect response, or None to continue normal request handling
        """
        try:
            descriptor = RequestDescriptor.from_request(request)
        except Exception:
            logger.exception("Could not read request for redirect check")
            return None

        decision = self.resolve(descriptor)
        if decision is None:
            return None

        logger.info("Redirecting %s to %s (%d)", descriptor.full_href,
                    decision.target_url, decision.status_code)
        return build_redirect_response(decision)
