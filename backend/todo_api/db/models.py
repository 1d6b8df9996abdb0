from datetime import datetime, timezone
from typing import Optional
from pydantic import NaiveDatetime
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field

TITLE_MAX_LENGTH = 255


def utcnow() -> datetime:
    # UTC wall time without tzinfo; SQLite has no timezone-aware column type
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Todo(SQLModel, table=True):
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted last row
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH, nullable=False)
    completed: bool = Field(default=False, nullable=False)
    created_at: NaiveDatetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )
    updated_at: NaiveDatetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )
