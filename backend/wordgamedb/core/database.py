from __future__ import annotations

import logging
import threading
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from ..config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """
    Process-wide database handle.

    The engine is built on first use and reused afterwards. If building it
    fails nothing is cached, so the next request tries again.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    def _engine_kwargs(self) -> dict:
        url = make_url(self.settings.database_url)
        if url.get_backend_name() == "sqlite":
            return {"connect_args": {"check_same_thread": False}}  # needed for SQLite
        return {
            "pool_size": self.settings.db_pool_size,
            "max_overflow": self.settings.db_max_overflow,
            "pool_timeout": self.settings.db_pool_timeout_sec,
            "pool_pre_ping": True,
        }

    def connect(self) -> sessionmaker:
        if self._sessionmaker is not None:
            return self._sessionmaker

        from .. import models  # noqa: F401  registers tables on Base.metadata

        with self._lock:
            if self._sessionmaker is None:
                engine = create_engine(self.settings.database_url, **self._engine_kwargs())
                try:
                    # Create tables; also proves the database is reachable
                    Base.metadata.create_all(bind=engine)
                except Exception:
                    engine.dispose()
                    raise
                self._engine = engine
                self._sessionmaker = sessionmaker(bind=engine, autoflush=False, autocommit=False)
                logger.info(
                    "Database connected (%s)",
                    make_url(self.settings.database_url).render_as_string(hide_password=True),
                )
        return self._sessionmaker

    def session(self) -> Session:
        return self.connect()()

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
