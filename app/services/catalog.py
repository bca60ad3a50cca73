"""
Catalog operations spanning more than one store.
"""

import logging

from app.models import store_operation
from app.services.favorites import FavoritesManager
from app.services.tracks import TrackStore

logger = logging.getLogger(__name__)


def delete_track(db_session, track_id: int):
    """Delete a track and every favorite pointing at it in one transaction.

    Raises:
        NotFound: no track with that id (nothing is changed)
    """
    removed = FavoritesManager(db_session).cascade_delete(track_id, commit=False)
    TrackStore(db_session).delete(track_id, commit=False)
    with store_operation(db_session, 'catalog.delete_track'):
        db_session.commit()
    logger.info('Deleted track id=%s and %d favorite(s)', track_id, removed)
