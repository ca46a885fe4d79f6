from __future__ import annotations

from .entities import CategoryEntity

# color: packed ARGB, icon: Material Icons code point
DEFAULT_CATEGORIES: tuple[CategoryEntity, ...] = (
    CategoryEntity(id="work", name="Work", color=0xFF2196F3, icon=0xEB3F),
    CategoryEntity(id="personal", name="Personal", color=0xFF4CAF50, icon=0xE7FD),
    CategoryEntity(id="shopping", name="Shopping", color=0xFFFF9800, icon=0xE8CC),
    CategoryEntity(id="health", name="Health", color=0xFFF44336, icon=0xE1D5),
    CategoryEntity(id="education", name="Education", color=0xFF9C27B0, icon=0xE80C),
)

DEFAULT_CATEGORY_IDS = tuple(category.id for category in DEFAULT_CATEGORIES)
