"""
Database initialization and SQLAlchemy instance.
"""

import logging
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import StoreFailure

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def init_db(app):
    """Initialize database with Flask app."""
    db.init_app(app)

    with app.app_context():
        # Import models to register them
        from . import user, track, favorite, session

        # Create all tables
        db.create_all()


@contextmanager
def store_operation(session, operation):
    """
    Run a unit of store work, converting driver errors into StoreFailure.

    The session is rolled back on failure so the next operation starts clean.
    """
    try:
        yield session
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception('Store operation %s failed: %s', operation, e.__class__.__name__)
        raise StoreFailure(operation) from e
