"""
Request Descriptor module.
Read-only view of the parts of an inbound request the redirect matcher needs.
"""
from urllib.parse import quote

# RFC 3986 pchar plus "/", left unescaped when re-encoding a decoded path
PATH_SAFE_CHARS = "/!$&'()*+,;=:@-._~"


class RequestDescriptor:
    """Path, raw query string and path+query of an inbound request."""

    def __init__(self, path: str, query_search: str = ''):
        """
        Initialize a request descriptor.

        Args:
            path: The request path without query string
            query_search: The raw query string including the leading '?',
                          or '' when the request has no query string
        """
        self.path = path
        self.query_search = query_search
        # Scheme and host are excluded so rules can be compared against it
        self.full_href = path + query_search

    @classmethod
    def from_request(cls, request) -> 'RequestDescriptor':
        """
        Build a descriptor from a Flask request.

        Both path and query string keep their percent-encoding. The path is
        taken from the raw request URI when the server provides one, and is
        re-encoded from the decoded PATH_INFO otherwise.
        """
        query_string = request.query_string.decode('utf-8')
        query_search = '?' + query_string if query_string else ''
        return cls(cls._raw_path(request), query_search)

    @staticmethod
    def _raw_path(request) -> str:
        """Get the request path as it was sent on the wire."""
        raw_uri = request.environ.get('RAW_URI') or request.environ.get('REQUEST_URI')
        # The raw URI includes SCRIPT_NAME, request.path does not
        if isinstance(raw_uri, str) and raw_uri.startswith('/') and not request.script_root:
            return raw_uri.split('?', 1)[0]
        return quote(request.path, safe=PATH_SAFE_CHARS)

    def __repr__(self):
        return f'RequestDescriptor({self.full_href!r})'
