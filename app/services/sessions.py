"""
Session Manager - durable login sessions keyed by opaque tokens.
"""

import logging
import secrets
from datetime import datetime, timedelta

from config import config
from app.exceptions import Unauthenticated
from app.models import UserSession, store_operation

logger = logging.getLogger(__name__)


class SessionManager:
    """Maps session tokens to user ids.

    Only the SHA-256 of a token is stored, so a leaked sessions table cannot
    be replayed as cookies.
    """

    def __init__(self, db_session, ttl: timedelta = None):
        self.db_session = db_session
        self.ttl = ttl or timedelta(hours=config.SESSION_TTL_HOURS)

    def start(self, user_id: int, now: datetime = None) -> str:
        """Create a session for user_id and return its plain token."""
        now = now or datetime.utcnow()
        token = secrets.token_urlsafe(32)
        record = UserSession(
            user_id=user_id,
            token_hash=UserSession.hash_token(token),
            created_at=now,
            expires_at=now + self.ttl,
        )
        with store_operation(self.db_session, 'sessions.start'):
            self.db_session.add(record)
            self.db_session.commit()
        return token

    def resolve(self, token: str, now: datetime = None) -> int:
        """Return the user id bound to an active session.

        Raises:
            Unauthenticated: token missing, unknown or expired
        """
        if not token:
            raise Unauthenticated()

        with store_operation(self.db_session, 'sessions.resolve'):
            record = self.db_session.query(UserSession).filter_by(
                token_hash=UserSession.hash_token(token)
            ).first()

        if not record or not record.is_active(now):
            raise Unauthenticated('Session expired or unknown')
        return record.user_id

    def destroy(self, token: str):
        """Remove a session. Unknown tokens are not an error."""
        if not token:
            return
        with store_operation(self.db_session, 'sessions.destroy'):
            self.db_session.query(UserSession).filter_by(
                token_hash=UserSession.hash_token(token)
            ).delete()
            self.db_session.commit()

    def destroy_other_sessions(self, user_id: int, keep_token: str = None) -> int:
        """Remove every session of user_id except the one holding keep_token."""
        with store_operation(self.db_session, 'sessions.destroy_other_sessions'):
            query = self.db_session.query(UserSession).filter(UserSession.user_id == user_id)
            if keep_token:
                query = query.filter(UserSession.token_hash != UserSession.hash_token(keep_token))
            removed = query.delete()
            self.db_session.commit()
        return removed

    def purge_expired(self, now: datetime = None) -> int:
        """Delete sessions past their expiry. Returns the number removed."""
        now = now or datetime.utcnow()
        with store_operation(self.db_session, 'sessions.purge_expired'):
            removed = self.db_session.query(UserSession).filter(UserSession.expires_at <= now).delete()
            self.db_session.commit()
        if removed:
            logger.info('Purged %d expired session(s)', removed)
        return removed
