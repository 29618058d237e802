"""Create todos table

Revision ID: 001
Revises: None
Create Date: 2025-09-30 00:00:00.000000+00:00

What:  The `todos` table: application-generated UUID key, free-text title,
       store-assigned creation time.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "todos",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Backs the only read: ORDER BY created_at DESC
    op.create_index(
        "idx_todos_created_at",
        "todos",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_todos_created_at", table_name="todos")
    op.drop_table("todos")
