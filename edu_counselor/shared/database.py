import logging
from datetime import datetime, timezone

from sqlalchemy import JSON, Text, create_engine, event
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL
from .errors import UniquenessViolation

logger = logging.getLogger(__name__)

# TEXT[] and JSONB on postgres, plain JSON everywhere else
TextArray = JSON().with_variant(ARRAY(Text), "postgresql")
JsonDocument = JSON().with_variant(JSONB, "postgresql")


class Base(DeclarativeBase):
    pass


def make_engine(url: str = DATABASE_URL) -> Engine:
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            # chat_messages relies on ON DELETE CASCADE
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # register every table on Base.metadata before creating
    from .. import models  # noqa: F401
    from . import triggers  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Schema ready (%d tables)", len(Base.metadata.tables))


def db_dependency(SessionLocal):
    def get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    return get_db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def commit_unique(db: Session, detail: str) -> None:
    """Commit, turning a unique/primary key conflict into UniquenessViolation."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Integrity error: %s", e.orig)
        raise UniquenessViolation(detail) from e
