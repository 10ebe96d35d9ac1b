"""Middleware for the request identity context."""
from flask import current_app, g, request


def load_request_identity():
    """
    Load the caller identity into g (Flask's per-request global).

    The authentication gateway in front of the API verifies the caller and
    forwards the result as headers. Sets g.customer_id and g.user_role;
    both are None for anonymous requests.
    """
    customer_header = current_app.config.get('CUSTOMER_ID_HEADER', 'X-Customer-Id')
    role_header = current_app.config.get('USER_ROLE_HEADER', 'X-User-Role')

    g.customer_id = (request.headers.get(customer_header) or '').strip() or None
    g.user_role = (request.headers.get(role_header) or '').strip() or None
