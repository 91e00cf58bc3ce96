# app/db/database.py - SQLAlchemy engine, sessions and Base

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    return create_engine(settings.database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create missing tables. Alembic revisions mirror this schema."""
    # Models must be imported so their tables are registered on Base
    from app.models import subscription  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database connected and migrated")


def get_db(request: Request) -> Iterator[Session]:
    """Yield a session bound to the app's engine; closed after the request."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
