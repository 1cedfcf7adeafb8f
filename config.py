"""
Configuration module for the redirect service.
Handles environment variable parsing and configuration management.
"""
import os
from typing import List

DEFAULT_REDIRECTS_API_URL = 'https://api-qa.fhtw.ovl.cloud/redirects'


class Config:
    """Manages redirect service configuration from environment variables."""

    def __init__(self):
        self.listener_port = int(os.getenv('LISTENER_PORT', '8080'))
        self.redirects_api_url = os.getenv('REDIRECTS_API_URL', DEFAULT_REDIRECTS_API_URL)
        self.fetch_timeout = self._parse_milliseconds('REDIRECTS_FETCH_TIMEOUT', '5000') / 1000.0  # Convert ms to seconds
        # 0 disables the cache, rules are fetched for every request
        self.cache_ttl = self._parse_milliseconds('REDIRECTS_CACHE_TTL', '0')
        self.api_prefixes = self._parse_api_prefixes(os.getenv('REDIRECTS_API_PREFIXES', '/api/'))
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    def get_listener_port(self) -> int:
        """Get the listener port."""
        return self.listener_port

    def get_redirects_api_url(self) -> str:
        """Get the rule source endpoint."""
        return self.redirects_api_url

    def get_fetch_timeout(self) -> float:
        """Get the rule fetch timeout in seconds."""
        return self.fetch_timeout

    def get_cache_ttl(self) -> int:
        """Get the rule cache TTL in milliseconds."""
        return self.cache_ttl

    def get_api_prefixes(self) -> List[str]:
        """Get the reserved path prefixes that are never redirected."""
        return self.api_prefixes

    def get_log_level(self) -> str:
        """Get the logging level name."""
        return self.log_level

    def _parse_milliseconds(self, key: str, default: str) -> int:
        """
        Parse a non-negative millisecond value from an environment variable.

        Args:
            key: The environment variable name
            default: The value used when the variable is not set

        Returns:
            The parsed value in milliseconds

        Raises:
            ValueError: If the value is not an integer or is negative
        """
        raw = os.getenv(key, default)
        try:
            value = int(raw.strip())
        except ValueError:
            raise ValueError(f"Invalid {key} value '{raw}': expected milliseconds as an integer")
        if value < 0:
            raise ValueError(f"{key} must be >= 0, got {value}")
        return value

    def _parse_api_prefixes(self, prefixes_str: str) -> List[str]:
        """
        Parse reserved API prefixes.
        Format: <prefix>,<prefix>,...
        """
        return [prefix.strip() for prefix in prefixes_str.split(',') if prefix.strip()]
