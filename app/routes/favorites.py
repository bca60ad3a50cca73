"""
Favorite Routes - add, remove and list a user's favorites.
"""

from flask import Blueprint, abort, redirect, render_template, url_for
from flask_login import current_user

from app.auth.decorators import require_user_id, session_required
from app.exceptions import NotFound
from app.models import db
from app.services import FavoritesManager

bp = Blueprint('favorites', __name__)


@bp.route('/favorite/<int:track_id>', methods=['POST'])
@session_required
def favorite(track_id):
    """Favorite a track (idempotent)."""
    try:
        FavoritesManager(db.session).add(require_user_id(), track_id)
    except NotFound:
        abort(404)
    return redirect(url_for('favorites.list_favorites'))


@bp.route('/unfavorite/<int:track_id>', methods=['POST'])
@session_required
def unfavorite(track_id):
    """Unfavorite a track."""
    FavoritesManager(db.session).remove(require_user_id(), track_id)
    return redirect(url_for('favorites.list_favorites'))


@bp.route('/favorites')
@session_required
def list_favorites():
    tracks = FavoritesManager(db.session).list(require_user_id())
    return render_template('favorites.html', user=current_user, tracks=tracks)
