"""
Auth decorators for protected routes.
"""

from functools import wraps

from flask_login import current_user

from app.exceptions import Unauthenticated


def require_user_id():
    """Capability check: return the caller's user id or raise Unauthenticated."""
    if not current_user.is_authenticated:
        raise Unauthenticated()
    return current_user.id


def session_required(f):
    """Decorator that requires a valid session.

    Guests get Unauthenticated, which the app turns into a redirect to /login.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        require_user_id()
        return f(*args, **kwargs)
    return decorated
