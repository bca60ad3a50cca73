"""
Track Store - create, browse, shuffle and delete tracks.
"""

import logging

from sqlalchemy import func

from app.exceptions import InvalidInput, NotFound
from app.models import Track, DEFAULT_ARTIST, DEFAULT_GENRE, store_operation
from app.utils import clean_text, is_embed_url

logger = logging.getLogger(__name__)


class TrackStore:
    """Persistence for Track records."""

    def __init__(self, db_session):
        self.db_session = db_session

    def create(self, name: str, embed_url: str, artist: str = None, genre: str = None) -> Track:
        """Validate and save a new track."""
        name = clean_text(name)
        embed_url = str(embed_url or '').strip()

        if not name:
            raise InvalidInput('Track name is required', field='name')
        if not is_embed_url(embed_url):
            raise InvalidInput('URL must be a YouTube embed link', field='embed_url')

        track = Track(
            name=name,
            artist=clean_text(artist) or DEFAULT_ARTIST,
            genre=clean_text(genre, max_length=100) or DEFAULT_GENRE,
            embed_url=embed_url[:500],
        )
        with store_operation(self.db_session, 'tracks.create'):
            self.db_session.add(track)
            self.db_session.commit()

        logger.info('Added track %s (id=%s)', track.name, track.id)
        return track

    def find_all(self) -> list:
        """Return every track, newest first."""
        with store_operation(self.db_session, 'tracks.find_all'):
            return self.db_session.query(Track).order_by(Track.created_at.desc(), Track.id.desc()).all()

    def find_by_id(self, track_id: int) -> Track:
        with store_operation(self.db_session, 'tracks.find_by_id'):
            track = self.db_session.get(Track, track_id)
        if not track:
            raise NotFound('track', track_id)
        return track

    def find_random(self):
        """Pick one track uniformly at random, or None when there are none."""
        with store_operation(self.db_session, 'tracks.find_random'):
            return self.db_session.query(Track).order_by(func.random()).first()

    def delete(self, track_id: int, commit: bool = True):
        """Delete a track row.

        Favorites pointing at it are not touched here; use
        catalog.delete_track to remove both.
        """
        with store_operation(self.db_session, 'tracks.delete'):
            removed = self.db_session.query(Track).filter_by(id=track_id).delete()
            if not removed:
                self.db_session.rollback()
                raise NotFound('track', track_id)
            if commit:
                self.db_session.commit()

    def count(self) -> int:
        with store_operation(self.db_session, 'tracks.count'):
            return self.db_session.query(Track).count()
