"""
Models package for Palate Cleanser.
"""

from .database import db, init_db, store_operation
from .user import User
from .track import Track, DEFAULT_ARTIST, DEFAULT_GENRE
from .favorite import Favorite
from .session import UserSession

__all__ = [
    'db', 'init_db', 'store_operation', 'User', 'Track', 'DEFAULT_ARTIST',
    'DEFAULT_GENRE', 'Favorite', 'UserSession',
]
