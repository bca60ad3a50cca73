"""
Palate Cleanser - random embedded tracks with accounts and favorites.

Flask application factory and initialization.
"""

import os
from datetime import timedelta
from flask import Flask, render_template
from config import config

from .exceptions import ConfigurationError, StoreFailure, Unauthenticated


def _seed_tracks(app):
    """Load example tracks on first run."""
    with app.app_context():
        from app.seed import populate_tracks
        populate_tracks()


def _purge_expired_sessions(app):
    """Drop sessions that expired while the server was down."""
    with app.app_context():
        from app.models import db
        from app.services import SessionManager
        SessionManager(db.session).purge_expired()


def create_app(testing=False, bootstrap=True):
    """Create and configure the Flask application.

    bootstrap=False skips the startup housekeeping (session purge, seeding)
    for maintenance commands that do it themselves.
    """

    if not config.SQLALCHEMY_DATABASE_URI:
        raise ConfigurationError(
            'DATABASE_URL is not defined in the environment variables (.env file).'
        )

    app = Flask(__name__,
                template_folder='../templates',
                static_folder='../static')

    app.config['TESTING'] = testing

    # Configuration
    secret_key = os.getenv('SECRET_KEY', config.SECRET_KEY)
    if not secret_key:
        app.logger.warning('SECRET_KEY not set; using a key derived from the install path')
        secret_key = config.FALLBACK_SECRET_KEY
    app.config['SECRET_KEY'] = secret_key
    app.config['SQLALCHEMY_DATABASE_URI'] = config.SQLALCHEMY_DATABASE_URI
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Session cookie security; lifetime matches the server-side session TTL
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(hours=config.SESSION_TTL_HOURS)
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['SESSION_COOKIE_SECURE'] = os.getenv('FLASK_ENV') == 'production'

    # Initialize database
    from app.models import init_db
    init_db(app)

    # Initialize authentication
    from app.auth import init_auth
    init_auth(app)

    # Initialize rate limiter
    from app.limiter import limiter
    if app.config.get('TESTING'):
        app.config['RATELIMIT_ENABLED'] = False
    limiter.init_app(app)

    if bootstrap:
        _purge_expired_sessions(app)
        if config.SEED_TRACKS and not testing:
            _seed_tracks(app)

    # Register blueprints
    from app.auth.routes import bp as auth_bp
    from app.routes.tracks import bp as tracks_bp
    from app.routes.favorites import bp as favorites_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(tracks_bp)
    app.register_blueprint(favorites_bp)

    @app.errorhandler(Unauthenticated)
    def redirect_to_login(error):
        from flask import redirect, url_for
        return redirect(url_for('auth.login_form'))

    @app.errorhandler(StoreFailure)
    def store_failure(error):
        app.logger.error('Request failed in %s', error.operation)
        return render_template('error.html', message='Something went wrong. Please try again.'), 500

    @app.errorhandler(404)
    def not_found(error):
        return render_template('error.html', message='404 Not Found'), 404

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    return app


__all__ = ['create_app']
