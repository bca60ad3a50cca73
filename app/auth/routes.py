"""
Auth Routes - Register, login, logout, password change.
"""

import logging

from flask import Blueprint, redirect, render_template, request, session, url_for
from flask_login import current_user

from app.auth import SESSION_TOKEN_KEY, end_session, start_session
from app.auth.decorators import require_user_id, session_required
from app.exceptions import DuplicateUsername, InvalidInput
from app.limiter import limiter
from app.models import db
from app.services import CredentialStore, SessionManager

bp = Blueprint('auth', __name__)

logger = logging.getLogger(__name__)


@bp.route('/register', methods=['GET'])
def register_form():
    return render_template('register.html', error='')


@bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Create a new account and log it in."""
    username = request.form.get('username', '')
    password = request.form.get('password', '')

    try:
        user_id = CredentialStore(db.session).create(username, password)
    except InvalidInput as e:
        if e.field == 'username' and username.strip():
            return render_template('register.html', error=str(e)), 400
        return render_template(
            'register.html',
            error='Username/Password cannot be empty or password too short.',
        ), 400
    except DuplicateUsername as e:
        return render_template('register.html', error=str(e)), 409

    start_session(user_id)
    return redirect(url_for('tracks.index'))


@bp.route('/login', methods=['GET'])
def login_form():
    return render_template('login.html', error='')


@bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Login with username and password."""
    username = request.form.get('username', '')
    password = request.form.get('password', '')

    user = CredentialStore(db.session).authenticate(username, password)
    if not user:
        return render_template('login.html', error='Invalid username or password.'), 401

    start_session(user.id)
    logger.info('User %s logged in', user.username)
    return redirect(url_for('tracks.index'))


@bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the current session."""
    end_session()
    return redirect(url_for('auth.login_form'))


@bp.route('/account/password', methods=['GET'])
@session_required
def password_form():
    return render_template('password.html', user=current_user, error='', message='')


@bp.route('/account/password', methods=['POST'])
@session_required
@limiter.limit("3 per minute")
def change_password():
    """Change current user's password."""
    user_id = require_user_id()
    store = CredentialStore(db.session)

    current_password = request.form.get('current_password', '')
    new_password = request.form.get('new_password', '')

    if not store.verify(current_user, current_password):
        return render_template(
            'password.html', user=current_user,
            error='Current password is incorrect', message='',
        ), 400

    try:
        store.update_password(user_id, new_password)
    except InvalidInput as e:
        return render_template('password.html', user=current_user, error=str(e), message=''), 400

    # Other devices must log in again with the new password
    SessionManager(db.session).destroy_other_sessions(user_id, session.get(SESSION_TOKEN_KEY))

    return render_template('password.html', user=current_user, error='', message='Password updated.')
