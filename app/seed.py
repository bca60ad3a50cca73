"""
Example tracks loaded into an empty library at startup.
"""

import logging

from app.models import Track, db, store_operation

logger = logging.getLogger(__name__)

# Stable YouTube EMBED URLs (must stay in /embed/ format)
EXAMPLE_TRACKS = [
    {'name': 'Tibetan Bowl Resonances', 'artist': 'Calm Sounds',
     'genre': 'Ambient Drone', 'embed_url': 'https://www.youtube.com/embed/PjE2qf6F3F4'},
    {'name': 'Heavy Rain on Tin Roof', 'artist': 'Nature Sounds',
     'genre': 'White Noise', 'embed_url': 'https://www.youtube.com/embed/q76bMAP1Xqg'},
    {'name': 'Symphony No. 5 (First Movement)', 'artist': 'Classical Archive',
     'genre': 'Unexpected Classical', 'embed_url': 'https://www.youtube.com/embed/j_8CAgq7v0M'},
    {'name': '1980s Game Menu Music', 'artist': 'Retro Arcade',
     'genre': 'Chiptune', 'embed_url': 'https://www.youtube.com/embed/S_7gN8P5b9E'},
    {'name': 'French Jazz Cafe', 'artist': 'Bistro Background',
     'genre': 'Lo-Fi Instrumental', 'embed_url': 'https://www.youtube.com/embed/m6lH_S_z-xM'},
]


def populate_tracks(db_session=None) -> int:
    """Insert the example tracks if the library is empty. Returns rows added."""
    db_session = db_session or db.session

    with store_operation(db_session, 'seed.populate_tracks'):
        if db_session.query(Track).count() > 0:
            return 0

        for item in EXAMPLE_TRACKS:
            db_session.add(Track(**item))
        db_session.commit()

    logger.info('Injected %d example tracks', len(EXAMPLE_TRACKS))
    return len(EXAMPLE_TRACKS)
