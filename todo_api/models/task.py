from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, Text, false, func
from datetime import datetime
from typing import Optional


class Task(SQLModel, table=True):
    """Task row. ``id`` and ``created_at`` are assigned by the store."""
    __tablename__ = "tasks"
    # AUTOINCREMENT keeps SQLite from reusing the ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    is_completed: bool = Field(default=False, sa_column_kwargs={"server_default": false()})
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=False, server_default=func.now()),
    )
