"""
SQLAlchemy base class and engine/session factories for the SQL store.

Only one (sync) engine exists: the SQL store is called both from FastAPI
handlers (which FastAPI runs in its threadpool because they are plain
`def`) and from worker threads, so a sync session per call fits both.

SQLite needs check_same_thread=False for that, since a connection may be
used from a different thread than the one that opened it.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all ORM models. SQLAlchemy uses this to track table metadata."""
    pass


def make_engine(url: str, echo: bool = False) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            # one shared connection, otherwise every session gets its own empty DB
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo)

