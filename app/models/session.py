"""
Login session model.
"""

import hashlib
from datetime import datetime

from .database import db


class UserSession(db.Model):
    """Server-side session bound to one user; the client only holds the token."""

    __tablename__ = 'sessions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    token_hash = db.Column(db.String(64), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    @staticmethod
    def hash_token(token):
        """Hash a plain token for storage."""
        return hashlib.sha256(token.encode('utf-8')).hexdigest()

    def is_active(self, now=None):
        return (now or datetime.utcnow()) < self.expires_at
