"""
Permission decorators for the JSON API.
Identity comes from load_request_identity (g.customer_id / g.user_role).
"""

from functools import wraps
from flask import g

from app.exceptions import AuthenticationRequiredError, UnauthorizedError

ADMIN_ROLE = 'Admin'


def require_customer(f):
    """
    Decorator: Require an authenticated caller.

    Raises AuthenticationRequiredError (401) when no customer id was forwarded.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not g.get('customer_id'):
            raise AuthenticationRequiredError()
        return f(*args, **kwargs)
    return decorated_function


def require_role(*allowed_roles):
    """
    Decorator to restrict access to specific roles.

    Usage:
        @require_role('Admin')

    Args:
        *allowed_roles: Role names accepted (compared case-insensitively)

    Returns:
        Decorator function
    """
    accepted = {role.lower() for role in allowed_roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not g.get('customer_id'):
                raise AuthenticationRequiredError()

            user_role = g.get('user_role')
            if not user_role or user_role.lower() not in accepted:
                raise UnauthorizedError('You do not have permission to perform this action.')

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def admin_only(f):
    """
    Shortcut decorator for Admin-only routes.

    Usage:
        @admin_only
        def refund_sale(sale_id):
            ...
    """
    return require_role(ADMIN_ROLE)(f)
