from __future__ import annotations

import logging
from datetime import date, datetime

from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from .db import Base

logger = logging.getLogger(__name__)


class IsoDateTime(TypeDecorator):
    """Timestamp kept as ISO-8601 text (``2026-01-05T10:20:30.123456``)."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return datetime.fromisoformat(value)


class IsoDate(TypeDecorator):
    """Calendar day kept as ISO-8601 text; legacy full timestamps are truncated."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    def process_result_value(self, value, dialect):
        if not value:
            return None
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            logger.warning("Ignoring unreadable due date %r", value)
            return None


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(String, nullable=False, default="medium")
    created_at = Column("createdAt", IsoDateTime, nullable=False)
    due_date = Column("dueDate", IsoDate, nullable=True)
    category_id = Column("categoryId", String, nullable=True)


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    name = Column(Text, nullable=False)
    color = Column(Integer, nullable=False)
    icon = Column(Integer, nullable=False)
