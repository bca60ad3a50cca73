"""
Favorites Manager - the many-to-many relation between users and tracks.
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFound
from app.models import Favorite, Track, store_operation

logger = logging.getLogger(__name__)


class FavoritesManager:
    """Add/remove/list favorites with set semantics."""

    def __init__(self, db_session):
        self.db_session = db_session

    def add(self, user_id: int, track_id: int):
        """Favorite a track (idempotent)."""
        with store_operation(self.db_session, 'favorites.add'):
            if not self.db_session.get(Track, track_id):
                raise NotFound('track', track_id)

            existing = self.db_session.query(Favorite).filter_by(
                user_id=user_id, track_id=track_id
            ).first()
            if existing:
                return

            self.db_session.add(Favorite(user_id=user_id, track_id=track_id))
            try:
                self.db_session.commit()
            except IntegrityError:
                # A concurrent add won; the track is favorited either way
                self.db_session.rollback()

    def remove(self, user_id: int, track_id: int):
        """Unfavorite a track. Removing a non-favorite is a no-op."""
        with store_operation(self.db_session, 'favorites.remove'):
            self.db_session.query(Favorite).filter_by(
                user_id=user_id, track_id=track_id
            ).delete()
            self.db_session.commit()

    def ids_for(self, user_id: int) -> set:
        """Return the ids of every track the user has favorited."""
        with store_operation(self.db_session, 'favorites.ids_for'):
            rows = self.db_session.query(Favorite.track_id).filter_by(user_id=user_id).all()
        return {row.track_id for row in rows}

    def list(self, user_id: int) -> list:
        """Resolve a user's favorites into Track records, newest first.

        Entries whose track no longer exists are skipped.
        """
        with store_operation(self.db_session, 'favorites.list'):
            entries = (
                self.db_session.query(Favorite)
                .filter_by(user_id=user_id)
                .order_by(Favorite.added_at.desc(), Favorite.id.desc())
                .all()
            )
            track_ids = [entry.track_id for entry in entries]
            if not track_ids:
                return []
            tracks = {
                track.id: track
                for track in self.db_session.query(Track).filter(Track.id.in_(track_ids)).all()
            }

        resolved = []
        stale = 0
        for track_id in track_ids:
            track = tracks.get(track_id)
            if track is None:
                stale += 1
                continue
            resolved.append(track)

        if stale:
            logger.warning('Skipped %d dangling favorite(s) for user id=%s', stale, user_id)
        return resolved

    def cascade_delete(self, track_id: int, commit: bool = True) -> int:
        """Remove a track from every user's favorites. Returns rows removed."""
        with store_operation(self.db_session, 'favorites.cascade_delete'):
            removed = self.db_session.query(Favorite).filter_by(track_id=track_id).delete()
            if commit:
                self.db_session.commit()
        return removed
