#!/usr/bin/env python3
"""
Palate Cleanser CLI — maintenance commands.

Usage:
    python manage.py seed
    python manage.py purge-sessions

Reads DATABASE_URL from env vars (or .env file).
"""

import sys

from dotenv import load_dotenv


def seed():
    """Insert the example tracks if the library is empty."""
    from app import create_app
    app = create_app(bootstrap=False)

    with app.app_context():
        from app.seed import populate_tracks
        added = populate_tracks()

    if added:
        print(f"✅ Added {added} example tracks")
    else:
        print("Library already has tracks; nothing to do")


def purge_sessions():
    """Delete expired login sessions."""
    from app import create_app
    app = create_app(bootstrap=False)

    with app.app_context():
        from app.models import db
        from app.services import SessionManager
        removed = SessionManager(db.session).purge_expired()

    print(f"✅ Removed {removed} expired session(s)")


COMMANDS = {
    'seed': seed,
    'purge-sessions': purge_sessions,
}


def main():
    load_dotenv()

    if len(sys.argv) < 2:
        print("Usage: python manage.py <command>")
        print("Commands:")
        print("  seed             Add example tracks to an empty library")
        print("  purge-sessions   Delete expired login sessions")
        sys.exit(1)

    command = COMMANDS.get(sys.argv[1])
    if command is None:
        print(f"❌ Unknown command: {sys.argv[1]}")
        sys.exit(1)

    from app.exceptions import ConfigurationError
    try:
        command()
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
