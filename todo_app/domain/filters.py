from __future__ import annotations

from dataclasses import dataclass

from .enums import SortBy, StatusFilter


@dataclass(frozen=True)
class TaskFilters:
    status: StatusFilter = StatusFilter.ALL
    category_id: str | None = None
    search: str = ""
    sort_by: SortBy = SortBy.DATE

    @classmethod
    def coerce(
        cls,
        status: object = StatusFilter.ALL,
        category_id: str | None = None,
        search: str | None = None,
        sort_by: object = SortBy.DATE,
    ) -> TaskFilters:
        """Build filters from raw UI tokens, falling back to ``all``/``date``."""
        return cls(
            status=StatusFilter.coerce(status),
            category_id=category_id or None,
            search=search or "",
            sort_by=SortBy.coerce(sort_by),
        )
