"""Create requests table

Revision ID: 002
Revises: 001
Create Date: 2025-09-30 00:00:01.000000+00:00

What:  The `requests` table for service requests posted to the board.
       status defaults to '待處理' (new); the application never sets it on
       insert, so every new row starts there.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "requests",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column(
            "status",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'待處理'"),
        ),
        sa.Column("contact_person", sa.Text(), nullable=False),
        sa.Column("contact_phone", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_requests_created_at",
        "requests",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_requests_created_at", table_name="requests")
    op.drop_table("requests")
