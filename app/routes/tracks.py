"""
Track Routes - Randomizer, browse, add and delete.
"""

from urllib.parse import quote

from flask import Blueprint, abort, jsonify, redirect, render_template, request, url_for
from flask_login import current_user

from app.auth.decorators import session_required
from app.exceptions import InvalidInput, NotFound
from app.models import db
from app.services import FavoritesManager, TrackStore, delete_track

bp = Blueprint('tracks', __name__)


def _current_user_or_none():
    return current_user if current_user.is_authenticated else None


@bp.route('/')
def index():
    """Serve one random track."""
    store = TrackStore(db.session)
    user = _current_user_or_none()
    favorite_ids = FavoritesManager(db.session).ids_for(user.id) if user else set()
    return render_template(
        'index.html',
        track=store.find_random(),
        user=user,
        favorite_ids=favorite_ids,
        tracks_count=store.count(),
        error=request.args.get('error', ''),
    )


@bp.route('/browse')
def browse():
    """List every track; mark favorites when logged in."""
    user = _current_user_or_none()
    favorite_ids = FavoritesManager(db.session).ids_for(user.id) if user else set()
    return render_template(
        'browse.html',
        tracks=TrackStore(db.session).find_all(),
        user=user,
        favorite_ids=favorite_ids,
    )


@bp.route('/add', methods=['POST'])
@session_required
def add_track():
    """Add a user-contributed track."""
    try:
        TrackStore(db.session).create(
            name=request.form.get('name', ''),
            embed_url=request.form.get('embedUrl') or request.form.get('embed_url', ''),
            artist=request.form.get('artist'),
            genre=request.form.get('genre'),
        )
    except InvalidInput:
        message = ('Invalid track details: Name is required, '
                   'and URL must be a YouTube embed link.')
        return redirect(url_for('tracks.index') + '?error=' + quote(message))

    return redirect(url_for('tracks.index'))


@bp.route('/delete/<int:track_id>', methods=['POST'])
@session_required
def remove_track(track_id):
    """Delete a track and scrub it from every user's favorites."""
    try:
        delete_track(db.session, track_id)
    except NotFound:
        abort(404)
    return redirect(url_for('tracks.browse'))


@bp.route('/healthz')
def health():
    """Liveness probe with a cheap store round-trip."""
    return jsonify({'status': 'ok', 'tracks': TrackStore(db.session).count()})
