from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings


def make_engine(database_url: str, timeout: int = settings.STORAGE_TIMEOUT_SECONDS):
    """
    Create an engine with every storage call bounded by `timeout` seconds.

    SQLite waits on the busy handler for locks, PostgreSQL aborts statements
    that run past statement_timeout. Both surface as SQLAlchemy errors.
    """
    backend = make_url(database_url).get_backend_name()

    if backend == "sqlite":
        engine = create_engine(
            database_url,
            connect_args={
                "check_same_thread": False,
                "timeout": timeout
            },
            pool_pre_ping=True
        )

        # Enable WAL mode and foreign keys for SQLite
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

        return engine

    connect_args = {}
    if backend == "postgresql":
        connect_args["options"] = f"-c statement_timeout={timeout * 1000}"

    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        pool_timeout=timeout
    )


engine = make_engine(settings.DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def init_db(bind=None):
    """Create all database tables"""
    from . import models  # noqa: F401  register tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
