"""Decorators for the auth blueprint."""

from functools import wraps

from flask import session

from tourney.errors import AuthorizationError


def require_admin():
    """Raise AuthorizationError unless the session belongs to an administrator."""
    if "user_id" not in session:
        raise AuthorizationError("auth required")
    if not session.get("is_admin"):
        raise AuthorizationError("admin privileges required", 403)


def login_required(f=None, admin_required=False):
    """Reject the request unless the user is logged in.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if "user_id" not in session:
                raise AuthorizationError("auth required")
            if admin_required:
                require_admin()
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
