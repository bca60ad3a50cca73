"""
Configuration Module for Palate Cleanser.
Centralizes all app settings with environment variable support.
"""

import hashlib
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration with sensible defaults."""

    # Flask — stable fallback key derived from the project path so it survives restarts
    _fallback_key = hashlib.sha256(
        f'palate-secret-{Path(__file__).parent.parent}'.encode()
    ).hexdigest()
    SECRET_KEY = os.getenv('SECRET_KEY')
    FALLBACK_SECRET_KEY = _fallback_key

    # Database — no default; a missing connection string is fatal
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions
    SESSION_TTL_HOURS = int(os.getenv('SESSION_TTL_HOURS', '24'))

    # Startup
    SEED_TRACKS = os.getenv('SEED_TRACKS', 'true').lower() == 'true'

    # Validation
    MIN_PASSWORD_LENGTH = 6
    MAX_USERNAME_LENGTH = 80


# Create default instance
config = Config()
