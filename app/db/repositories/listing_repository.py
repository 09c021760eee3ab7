"""
Listing repository - listing data access with the owner projection eagerly loaded.
Challenge: Avoid N+1 on owner lookups; keep every write a single committed unit.
"""

from dataclasses import dataclass

from sqlalchemy import case, func, select
from sqlalchemy.orm import selectinload

from app.db.models.listing import Listing, ListingStatus
from app.db.repositories.base_repository import BaseRepository


@dataclass(frozen=True)
class ListingStats:
    total: int
    available: int
    sold: int
    total_value: float


class ListingRepository(BaseRepository[Listing]):
    """SQLAlchemy-backed listing store used by ListingService."""

    def __init__(self, session):
        super().__init__(session, Listing)

    def _select_with_owner(self):
        # populate_existing: a reload after commit must overwrite what the identity map holds
        return (
            select(Listing)
            .options(selectinload(Listing.owner))
            .execution_options(populate_existing=True)
        )

    async def get_with_owner(self, listing_id: int) -> Listing | None:
        result = await self.session.execute(self._select_with_owner().where(Listing.id == listing_id))
        return result.scalar_one_or_none()

    async def list_with_owner(self, owner_id: int | None = None) -> list[Listing]:
        """Newest first. Restricted to one owner when owner_id is given."""
        stmt = self._select_with_owner().order_by(Listing.created_at.desc(), Listing.id.desc())
        if owner_id is not None:
            stmt = stmt.where(Listing.owner_id == owner_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, listing: Listing) -> Listing:
        listing = await self.add(listing)
        return await self.get_with_owner(listing.id)

    async def save(self, listing: Listing) -> Listing:
        await self.session.commit()
        return await self.get_with_owner(listing.id)

    async def remove(self, listing: Listing) -> None:
        await self.delete(listing)

    async def stats_for_owner(self, owner_id: int) -> ListingStats:
        """Counts and price total for one owner in a single aggregate query."""
        stmt = select(
            func.count(Listing.id),
            func.count(case((Listing.status == ListingStatus.AVAILABLE.value, 1))),
            func.count(case((Listing.status == ListingStatus.SOLD.value, 1))),
            func.coalesce(func.sum(Listing.price), 0.0),
        ).where(Listing.owner_id == owner_id)
        total, available, sold, total_value = (await self.session.execute(stmt)).one()
        return ListingStats(
            total=int(total),
            available=int(available),
            sold=int(sold),
            total_value=float(total_value),
        )
