"""
Favorite model - which users favorited which tracks.
"""

from datetime import datetime

from .database import db


class Favorite(db.Model):
    """User's favorite mark on a track.

    No ON DELETE CASCADE: rows pointing at a deleted track are removed by
    FavoritesManager.cascade_delete.
    """

    __tablename__ = 'favorites'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'track_id', name='uq_user_favorite'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    track_id = db.Column(db.Integer, db.ForeignKey('tracks.id'), nullable=False, index=True)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
