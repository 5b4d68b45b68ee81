"""Create robots table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `robots` table, the single collection of directory profiles.
How:   One UNIQUE constraint each on username, email and phone; these are
       what turn a duplicate create into a 400.

Rollback: downgrade() drops the table (all robots are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "robots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        # Stored verbatim; check-phone is an exact string match
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("style_type", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_robots_username"),
        sa.UniqueConstraint("email", name="uq_robots_email"),
        sa.UniqueConstraint("phone", name="uq_robots_phone"),
    )


def downgrade() -> None:
    op.drop_table("robots")
