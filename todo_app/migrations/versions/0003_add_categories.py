"""add categories table and task category reference"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0003_add_categories"
down_revision = "0002_add_due_date"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("tasks", sa.Column("categoryId", sa.Text(), nullable=True))
    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("color", sa.Integer(), nullable=False),
        sa.Column("icon", sa.Integer(), nullable=False),
    )
    op.bulk_insert(
        categories,
        [
            {"id": "work", "name": "Work", "color": 0xFF2196F3, "icon": 0xEB3F},
            {"id": "personal", "name": "Personal", "color": 0xFF4CAF50, "icon": 0xE7FD},
            {"id": "shopping", "name": "Shopping", "color": 0xFFFF9800, "icon": 0xE8CC},
            {"id": "health", "name": "Health", "color": 0xFFF44336, "icon": 0xE1D5},
            {"id": "education", "name": "Education", "color": 0xFF9C27B0, "icon": 0xE80C},
        ],
    )


def downgrade() -> None:
    op.drop_table("categories")
    op.drop_column("tasks", "categoryId")
