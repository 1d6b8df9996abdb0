import logging
from pathlib import Path
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from ..core.errors import StorageUnavailable

logger = logging.getLogger(__name__)


class Database:
    """
    Explicit handle on the todo database.

    Opened once at process start and closed at shutdown; handlers receive
    sessions from it instead of reaching for a module-level engine.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageUnavailable("database is not open")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "Database":
        if self._engine is not None:
            return self

        url = make_url(self.url)
        kwargs: dict = {"echo": self.echo}
        if url.get_backend_name() == "sqlite":
            # FastAPI runs sync routes in a threadpool
            kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_engine(self.url, **kwargs)
        try:
            init_db(self._engine)
        except OperationalError as e:
            self._engine.dispose()
            self._engine = None
            logger.exception("Could not initialise database url=%s", url.render_as_string(hide_password=True))
            raise StorageUnavailable(str(e)) from e

        logger.info("Database ready url=%s", url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("Database closed")

    def session(self) -> Iterator[Session]:
        with Session(self.engine) as session:
            yield session

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except OperationalError as e:
            raise StorageUnavailable(str(e)) from e


def init_db(engine: Engine) -> None:
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_session(request: Request):
    yield from get_database(request).session()
