"""
RoboFriends — Robot SQLAlchemy Model
======================================

What:  ORM model representing the `robots` table, the single collection of
       directory profiles.
Why:   Maps Python objects to rows; the table's UNIQUE constraints are the
       final authority on username/email/phone uniqueness.
Who:   Used by RobotService for list/check/create and by Alembic.

Table Design:
    - Integer autoincrement id: assigned by the store, and gives insertion
      order for the list endpoint
    - username, email, phone: each UNIQUE; a duplicate insert raises
      IntegrityError at flush time
    - phone is stored verbatim (no normalization) so check-phone can do an
      exact string match
    - image: avatar URL generated by the client
    - style_type: one of the client's style keys (Robots, Monsters, ...)
    - created_at: UTC timestamp with timezone
    - string columns are Text with no length limit
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from robofriends.database import Base


class Robot(Base):
    """
    A robot profile in the directory.

    Lifecycle:
        Created only through POST /api/robots. Never updated or deleted.
    """

    __tablename__ = "robots"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    username: Mapped[str] = mapped_column(Text, nullable=False)

    email: Mapped[str] = mapped_column(Text, nullable=False)

    # Exact string as entered; "555-0100" and "5550100" are different phones
    phone: Mapped[str] = mapped_column(Text, nullable=False)

    image: Mapped[str] = mapped_column(Text, nullable=False)

    style_type: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_robots_username"),
        UniqueConstraint("email", name="uq_robots_email"),
        UniqueConstraint("phone", name="uq_robots_phone"),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Robot(id={self.id}, username='{self.username}', phone='{self.phone}')>"
