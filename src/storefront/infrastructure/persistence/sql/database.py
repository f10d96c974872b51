"""SQLAlchemy engine and session management.

The engine is created lazily on first use, exactly once per Database
instance, under a lock so concurrent first callers share it. Creating it
also creates the schema; if that fails the store is reported unavailable
and the next call tries again.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import StoreError, StoreUnavailableError
from storefront.infrastructure.persistence.sql.tables import Base

logger = logging.getLogger(__name__)


class Database:

    def __init__(self, url: str, connect_timeout: float = 15.0, echo: bool = False) -> None:
        self._url = make_url(url)
        self._connect_timeout = connect_timeout
        self._echo = echo
        self._engine: Engine | None = None
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = self._connect()
        return self._engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session inside a transaction, committed on success.

        Driver errors are translated into StoreError subclasses.
        """
        engine = self.engine
        try:
            with Session(engine, expire_on_commit=False) as session, session.begin():
                yield session
        except OperationalError as exc:
            logger.error("Database operation failed: %s", exc.orig)
            raise StoreUnavailableError("Database not connected") from exc
        except SQLAlchemyError as exc:
            logger.error("Database error: %s", exc)
            raise StoreError("Database error") from exc

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (StoreError, SQLAlchemyError):
            return False
        return True

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
                logger.info("Database engine disposed")

    # --- Engine construction --------------------------------------------------

    def _connect(self) -> Engine:
        try:
            engine = self._create_engine()
        except (ArgumentError, ImportError) as exc:
            logger.error("Cannot create database engine: %s", exc)
            raise StoreUnavailableError("Database not connected") from exc
        try:
            Base.metadata.create_all(engine)
        except (OperationalError, DBAPIError) as exc:
            engine.dispose()
            logger.error("Database connection error: %s", exc.orig)
            raise StoreUnavailableError("Database not connected") from exc
        logger.info("Connected to database %s", self._url.render_as_string(hide_password=True))
        return engine

    def _create_engine(self) -> Engine:
        backend = self._url.get_backend_name()
        kwargs: dict = {"echo": self._echo, "pool_pre_ping": True}

        if backend == "sqlite":
            kwargs["connect_args"] = {
                "timeout": self._connect_timeout,
                "check_same_thread": False,
            }
        else:
            kwargs["pool_timeout"] = self._connect_timeout
            kwargs["connect_args"] = {"connect_timeout": int(self._connect_timeout)}

        engine = create_engine(self._url, **kwargs)
        if backend == "sqlite":
            _use_immediate_transactions(engine)
        return engine


def _use_immediate_transactions(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock up front.

    pysqlite otherwise defers BEGIN, and two connections that both read
    before writing can fail with "database is locked" instead of waiting.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
