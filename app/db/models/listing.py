"""
Listing model - an item offered for exchange on the marketplace.
"""

import enum
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, String, Text, DateTime, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.db.models.user import User


class ListingCategory(str, enum.Enum):
    COMPUTERS = "computers"
    PHONES = "phones"
    TABLETS = "tablets"
    MONITORS = "monitors"
    PERIPHERALS = "peripherals"
    COMPONENTS = "components"
    OTHER = "other"


class ListingCondition(str, enum.Enum):
    NEW = "new"
    LIKE_NEW = "like-new"
    GOOD = "good"
    FAIR = "fair"
    FOR_PARTS = "for-parts"


class ListingStatus(str, enum.Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Listing(Base):
    """Listing entity. owner_id is written once on insert and never by updates."""

    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    condition: Mapped[str] = mapped_column(String(32), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ListingStatus.AVAILABLE.value, index=True
    )
    # Client-side defaults keep microsecond precision so newest-first ordering is stable.
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    owner: Mapped[Optional["User"]] = relationship("User")

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, title={self.title}, owner_id={self.owner_id})>"
