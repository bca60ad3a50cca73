"""
Credential Store - user accounts and password verification.
"""

import logging

from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from config import config
from app.exceptions import DuplicateUsername, InvalidInput, NotFound
from app.models import User, store_operation

logger = logging.getLogger(__name__)


class CredentialStore:
    """Creates users and checks their passwords.

    Plaintext passwords are only ever passed through to the hash functions;
    they are never stored, logged or returned.
    """

    def __init__(self, db_session):
        self.db_session = db_session

    def _validate_password(self, password):
        if not password or len(password) < config.MIN_PASSWORD_LENGTH:
            raise InvalidInput(
                f'Password must be at least {config.MIN_PASSWORD_LENGTH} characters',
                field='password',
            )

    def create(self, username: str, password: str) -> int:
        """Register a user and return its id."""
        username = str(username or '').strip()
        if not username:
            raise InvalidInput('Username cannot be empty', field='username')
        if len(username) > config.MAX_USERNAME_LENGTH:
            raise InvalidInput(
                f'Username must be at most {config.MAX_USERNAME_LENGTH} characters',
                field='username',
            )
        self._validate_password(password)

        with store_operation(self.db_session, 'users.create'):
            if self.db_session.query(User).filter_by(username=username).first():
                raise DuplicateUsername(username)

            user = User(username=username, password_hash=generate_password_hash(password))
            self.db_session.add(user)
            try:
                self.db_session.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration of the same name
                self.db_session.rollback()
                raise DuplicateUsername(username)

        logger.info('Registered user %s (id=%s)', username, user.id)
        return user.id

    def find_by_username(self, username: str) -> User:
        username = str(username or '').strip()
        with store_operation(self.db_session, 'users.find_by_username'):
            user = self.db_session.query(User).filter_by(username=username).first()
        if not user:
            raise NotFound('user', username)
        return user

    def find_by_id(self, user_id: int) -> User:
        with store_operation(self.db_session, 'users.find_by_id'):
            user = self.db_session.get(User, user_id)
        if not user:
            raise NotFound('user', user_id)
        return user

    def verify(self, user: User, candidate: str) -> bool:
        """Verify password against stored hash (constant-time digest compare)."""
        if not user.password_hash or candidate is None:
            return False
        return check_password_hash(user.password_hash, candidate)

    def authenticate(self, username: str, password: str):
        """Return the user for a username/password pair, or None.

        Unknown usernames and wrong passwords are indistinguishable.
        """
        try:
            user = self.find_by_username(username)
        except NotFound:
            return None
        if not self.verify(user, password):
            return None
        return user

    def update_password(self, user_id: int, new_password: str):
        """Hash and store a new password. Always re-hashes."""
        self._validate_password(new_password)
        user = self.find_by_id(user_id)
        with store_operation(self.db_session, 'users.update_password'):
            user.password_hash = generate_password_hash(new_password)
            self.db_session.commit()
        logger.info('Password changed for user id=%s', user_id)
