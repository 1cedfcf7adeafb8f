"""
Errors module.
Exceptions raised while fetching and decoding redirect rules.
"""


class RedirectError(Exception):
    """Base class for all redirect rule errors."""


class FetchFailure(RedirectError):
    """The rule source could not be reached or answered with a non-2xx status."""


class MalformedRuleData(RedirectError):
    """The rule source answered, but the body is not a valid rule list."""


class UnrecognizedQueryFlag(MalformedRuleData):
    """A rule carries a queryFlag that is not one of the known match modes."""

    def __init__(self, query_flag):
        super().__init__(f"Unrecognized queryFlag: {query_flag!r}")
        self.query_flag = query_flag
