from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how SQLite round-trips DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class AuditedModel(SQLModel):
    """
    Audit and soft-delete columns shared by every persisted entity.

    Rows are never physically removed; is_deleted hides them from live queries.
    """

    is_deleted: bool = Field(default=False, nullable=False)
    # sa_type rather than sa_column: a Column object cannot be shared by the
    # tables inheriting these fields
    created_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime, nullable=False
    )
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_by: Optional[UUID] = Field(default=None)
    updated_by: Optional[UUID] = Field(default=None)
