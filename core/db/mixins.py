from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampsMixin:
    # column names follow the camelCase layout the storefront was built against
    created_at = Column("createdAt", DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        "updatedAt",
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def touch(self):
        self.updated_at = utcnow()
