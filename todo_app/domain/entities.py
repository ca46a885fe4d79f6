from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from .enums import Priority


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    created_at: datetime = field(default_factory=datetime.now)
    due_date: Optional[date] = None
    category_id: str | None = None


@dataclass(frozen=True)
class CategoryEntity:
    id: str
    name: str
    color: int
    icon: int
