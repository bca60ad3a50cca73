"""
Services package for Palate Cleanser.
"""

from .credentials import CredentialStore
from .sessions import SessionManager
from .tracks import TrackStore
from .favorites import FavoritesManager
from .catalog import delete_track

__all__ = [
    'CredentialStore', 'SessionManager', 'TrackStore', 'FavoritesManager',
    'delete_track',
]
