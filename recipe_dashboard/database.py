"""
Database engine + session factory for the run store.

Nothing connects at import time; the application factory builds the engine
from a ListingConfig when the store is configured.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase


class Base(DeclarativeBase):
    pass


def store_url(url, key=None):
    """Normalize a store URL and attach the store key as its password."""
    # Hosted Postgres providers hand out postgres:// but SQLAlchemy 2.x requires postgresql://
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    parsed = make_url(url)
    if key and not parsed.drivername.startswith('sqlite'):
        parsed = parsed.set(password=key)
    return parsed


def create_store_engine(url, key=None):
    """Create an engine for the run store."""
    parsed = store_url(url, key)

    # SQLite needs different engine kwargs than Postgres
    if parsed.drivername.startswith('sqlite'):
        return create_engine(parsed, connect_args={'check_same_thread': False})
    return create_engine(parsed, pool_pre_ping=True, pool_size=5, max_overflow=10)


def make_session_factory(engine):
    """Return a sessionmaker bound to the given engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)
