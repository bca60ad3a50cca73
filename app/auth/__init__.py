"""
Authentication package for Palate Cleanser.
Flask-Login setup backed by server-side sessions.
"""

from flask import session
from flask_login import LoginManager

from app.exceptions import NotFound, Unauthenticated

login_manager = LoginManager()

# Key under which the opaque session token lives in the signed cookie
SESSION_TOKEN_KEY = 'sid'


def init_auth(app):
    """Initialize authentication with Flask app."""
    login_manager.init_app(app)

    @login_manager.request_loader
    def load_user_from_session(request):
        from app.models import db
        from app.services import CredentialStore, SessionManager

        token = session.get(SESSION_TOKEN_KEY)
        try:
            user_id = SessionManager(db.session).resolve(token)
            return CredentialStore(db.session).find_by_id(user_id)
        except (Unauthenticated, NotFound):
            return None


def start_session(user_id):
    """Start a server-side session and store its token in the cookie."""
    from app.models import db
    from app.services import SessionManager

    manager = SessionManager(db.session)
    previous = session.get(SESSION_TOKEN_KEY)
    if previous:
        manager.destroy(previous)

    token = manager.start(user_id)
    session.clear()
    session.permanent = True
    session[SESSION_TOKEN_KEY] = token
    return token


def end_session():
    """Destroy the current server-side session and clear the cookie."""
    from flask_login import logout_user
    from app.models import db
    from app.services import SessionManager

    # Destroy first so a store failure leaves the cookie intact for a retry
    SessionManager(db.session).destroy(session.get(SESSION_TOKEN_KEY))
    logout_user()
    session.clear()
