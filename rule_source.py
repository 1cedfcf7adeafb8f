"""
Rule Source module.
Fetches the current redirect rules from the remote configuration service.
"""
import logging
import threading
import time
from typing import Any, List, Optional

import requests

from config import Config
from errors import FetchFailure, MalformedRuleData
from redirect_rule import RedirectRule, parse_redirect_rules

logger = logging.getLogger(__name__)


class RuleSource:
    """Fetches redirect rules over HTTP from a fixed endpoint."""

    def __init__(self, url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        """
        Initialize a rule source.

        Args:
            url: The endpoint returning the JSON rule array
            timeout: Request timeout in seconds
            session: Optional session to reuse (one is created if omitted)
        """
        self.url = url
        self.timeout = timeout
        self._session = session or self._create_session()

    @classmethod
    def from_config(cls, config: Config) -> 'RuleSource':
        """Create a rule source from the service configuration."""
        return cls(config.get_redirects_api_url(), timeout=config.get_fetch_timeout())

    def _create_session(self) -> requests.Session:
        """
        Create a session for connection reuse across fetches.
        Retries are disabled, a failed fetch is not retried within one evaluation.
        """
        session = requests.Session()
        adapter = requests.adapters.HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        return session

    def fetch_redirect_rules(self) -> List[RedirectRule]:
        """
        Fetch and decode the current redirect rules.

        Returns:
            List of valid rules in the order served

        Raises:
            FetchFailure: On network errors, timeouts and non-2xx responses
            MalformedRuleData: If the body is not a JSON array
        """
        return parse_redirect_rules(self.fetch_payload())

    def fetch_payload(self) -> Any:
        """
        Fetch the raw decoded JSON body from the rule source.

        Raises:
            FetchFailure: On network errors, timeouts and non-2xx responses
            MalformedRuleData: If the body is not valid JSON
        """
        logger.debug("Fetching redirects from %s", self.url)
        try:
            response = self._session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise FetchFailure(f"Timed out fetching redirects from {self.url}") from e
        except requests.exceptions.RequestException as e:
            raise FetchFailure(f"Could not fetch redirects from {self.url}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedRuleData(f"Redirects response from {self.url} is not valid JSON") from e


class _Refresh:
    """Outcome of one in-flight fetch, shared by every thread waiting on it."""

    def __init__(self):
        self.done = threading.Event()
        self.rules: Optional[List[RedirectRule]] = None
        self.error: Optional[Exception] = None


class CachedRuleSource:
    """Serves the last fetched rule list until its TTL expires."""

    def __init__(self, source, ttl_ms: int):
        """
        Initialize a cached rule source.

        Args:
            source: Any object with a fetch_redirect_rules() method
            ttl_ms: How long a fetched rule list stays fresh, in milliseconds
        """
        self.source = source
        self.ttl_ms = ttl_ms
        self._rules: Optional[List[RedirectRule]] = None
        self._expires_at_ms = 0
        # Guards the cached state only, never held during a fetch
        self._lock = threading.Lock()
        self._refresh: Optional[_Refresh] = None

    def fetch_redirect_rules(self) -> List[RedirectRule]:
        """
        Return cached rules, refreshing them when stale.

        Only one thread fetches at a time. Threads arriving during a fetch
        wait for it and share its outcome, rules or exception. Failures are
        not cached, the next call after a failed fetch tries again.
        """
        with self._lock:
            now_ms = int(time.monotonic() * 1000)
            if self._rules is not None and now_ms < self._expires_at_ms:
                return self._rules

            refresh = self._refresh
            is_leader = refresh is None
            if is_leader:
                refresh = self._refresh = _Refresh()

        if is_leader:
            self._run_refresh(refresh)
        else:
            refresh.done.wait()

        if refresh.error is not None:
            raise refresh.error
        return refresh.rules

    def _run_refresh(self, refresh: '_Refresh'):
        """Fetch the rules and publish the outcome to waiting threads."""
        try:
            refresh.rules = self.source.fetch_redirect_rules()
        except Exception as e:
            refresh.error = e
        finally:
            with self._lock:
                if refresh.error is None and refresh.rules is not None:
                    self._rules = refresh.rules
                    self._expires_at_ms = int(time.monotonic() * 1000) + self.ttl_ms
                elif refresh.error is None:
                    refresh.error = FetchFailure("Redirect fetch was interrupted")
                self._refresh = None
            refresh.done.set()

    def invalidate(self):
        """Drop the cached rules so the next call fetches again."""
        with self._lock:
            self._rules = None
            self._expires_at_ms = 0


def create_rule_source(config: Config):
    """
    Build the rule source described by the configuration.
    Caching is only enabled when a positive TTL is configured.
    """
    source = RuleSource.from_config(config)
    if config.get_cache_ttl() > 0:
        return CachedRuleSource(source, config.get_cache_ttl())
    return source
