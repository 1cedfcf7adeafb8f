"""
Redirect Response module.
Builds the HTTP redirect response for a redirect decision.
"""
from flask import Response

from redirect_matcher import RedirectDecision


def build_redirect_response(decision: RedirectDecision) -> Response:
    """
    Create a redirect response for the given decision.

    Args:
        decision: The matched redirect

    Returns:
        Flask Response with the decision's status code, an empty payload and
        the target URL as the Location header, unmodified
    """
    response = Response('', status=decision.status_code)
    response.headers['Location'] = decision.target_url
    # Relative targets stay relative
    response.autocorrect_location_header = False
    return response
