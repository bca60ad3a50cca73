"""
Routes package for Palate Cleanser.
"""

from .tracks import bp as tracks_bp
from .favorites import bp as favorites_bp

__all__ = ['tracks_bp', 'favorites_bp']
