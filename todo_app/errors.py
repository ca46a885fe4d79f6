"""Error hierarchy for the task store and schema migrator.

Every error carries a human-readable message plus optional context so the
presentation layer can show it or log it without unpacking the cause.
"""
from __future__ import annotations

from typing import Any


class TodoError(Exception):
    """Base class for all task-list errors.

    Attributes:
        message: Human-readable error message
        context: Additional structured details (ids, versions, ...)
        original_error: The lower-level exception that caused this one, if any
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = self.context
        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error),
            }
        return result


class NotFoundError(TodoError):
    """A task or category id does not exist in the store."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(
            f"{entity} {entity_id!r} not found",
            context={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class DuplicateIdError(TodoError):
    """Insert with an id that is already present."""

    def __init__(
        self, entity: str, entity_id: str, *, original_error: Exception | None = None
    ) -> None:
        super().__init__(
            f"{entity} {entity_id!r} already exists",
            context={"entity": entity, "id": entity_id},
            original_error=original_error,
        )
        self.entity = entity
        self.entity_id = entity_id


class SchemaDowngradeError(TodoError):
    """The database was written by a newer schema than this code knows."""

    def __init__(self, on_disk: int | str, known: int) -> None:
        super().__init__(
            f"database schema version {on_disk} is newer than supported version {known}",
            context={"on_disk": on_disk, "known": known},
        )
        self.on_disk = on_disk
        self.known = known


class StorageUnavailableError(TodoError):
    """The database could not be opened, read or written."""
