"""
Track model for embeddable palate cleanser clips.
"""

from datetime import datetime

from .database import db

DEFAULT_ARTIST = 'User Contributed'
DEFAULT_GENRE = 'Unknown Palate Cleanser'


class Track(db.Model):
    """A short track played through an external embed player."""

    __tablename__ = 'tracks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    artist = db.Column(db.String(200), nullable=False, default=DEFAULT_ARTIST)
    genre = db.Column(db.String(100), nullable=False, default=DEFAULT_GENRE)
    embed_url = db.Column(db.String(500), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        """Convert to dictionary for templates and JSON responses."""
        from app.utils import extract_video_id, thumbnail_url

        return {
            'id': self.id,
            'name': self.name,
            'artist': self.artist,
            'genre': self.genre,
            'embed_url': self.embed_url,
            'thumbnail': thumbnail_url(extract_video_id(self.embed_url)),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
