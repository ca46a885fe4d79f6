from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def coerce(cls, value: object) -> Priority:
        try:
            return cls(value)
        except ValueError:
            return cls.MEDIUM


class StatusFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def coerce(cls, value: object) -> StatusFilter:
        try:
            return cls(value)
        except ValueError:
            return cls.ALL


class SortBy(StrEnum):
    DATE = "date"
    PRIORITY = "priority"
    TITLE = "title"

    @classmethod
    def coerce(cls, value: object) -> SortBy:
        try:
            return cls(value)
        except ValueError:
            return cls.DATE
