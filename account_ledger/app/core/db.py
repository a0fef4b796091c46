from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, text
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import Settings
from .locks import AccountLocks


logger = logging.getLogger(__name__)


def create_engine_for_settings(settings: Settings) -> Engine:
    connect_args: dict[str, Any] = {}
    if settings.is_sqlite:
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout,
        }
    return create_engine(
        settings.database_url, echo=settings.database_echo, connect_args=connect_args
    )


class Database:
    """Persistence handle owned by one running application.

    Holds the engine and the account lock registry that every request
    shares. Created on startup and disposed on shutdown by ``open_database``.
    """

    def __init__(self, settings: Settings) -> None:
        self.engine = create_engine_for_settings(settings)
        self.locks = AccountLocks()

    def init_schema(self) -> None:
        SQLModel.metadata.create_all(self.engine)

    def check_connection(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


@contextmanager
def open_database(settings: Settings) -> Iterator[Database]:
    database = Database(settings)
    try:
        database.check_connection()
        database.init_schema()
        logger.info("database.ready", extra={"database_url": database.engine.url.render_as_string()})
        yield database
    finally:
        database.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session(request: Request) -> Generator[Session, None, None]:
    with get_database(request).session() as session:
        yield session
