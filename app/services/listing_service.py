"""
Listing service - business logic for listings (SOLID: Single Responsibility).
Challenge: Enforce ownership on every mutation; keep controllers thin.
Design: Service depends on a ListingStore abstraction; the SQLAlchemy repository
is the production store and tests can pass an in-memory one.
"""

import functools
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from app.core.errors import (
    Forbidden,
    InvalidInput,
    MarketplaceError,
    NotFound,
    ServerError,
    validation_message,
)
from app.core.security import Identity
from app.db.models.listing import Listing, ListingStatus
from app.db.repositories.listing_repository import ListingStats
from app.schemas.dashboard import DashboardStats
from app.schemas.listing import ListingCreate, ListingResponse, ListingUpdate

logger = logging.getLogger(__name__)

LISTING_NOT_FOUND = "Listing not found"


class ListingStore(Protocol):
    """Read/write contract the service needs from storage."""

    async def get_with_owner(self, listing_id: int) -> Listing | None: ...

    async def list_with_owner(self, owner_id: int | None = None) -> list[Listing]: ...

    async def create(self, listing: Listing) -> Listing: ...

    async def save(self, listing: Listing) -> Listing: ...

    async def remove(self, listing: Listing) -> None: ...

    async def stats_for_owner(self, owner_id: int) -> ListingStats: ...


def ensure_owner(listing: Listing | None, identity: Identity) -> Listing:
    """Ownership guard: existence is checked before ownership."""
    if listing is None:
        raise NotFound(LISTING_NOT_FOUND)
    if listing.owner_id != identity.user_id:
        raise Forbidden("Not authorized")
    return listing


def _store_call(func):
    """Map unexpected store failures to ServerError; domain errors pass through."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except MarketplaceError:
            raise
        except Exception as exc:
            logger.exception("Listing operation %s failed", func.__name__)
            raise ServerError() from exc

    return wrapper


def _to_response(listing: Listing) -> ListingResponse:
    return ListingResponse.model_validate(listing)


class ListingService:
    """Listing use cases: list, get, list mine, create, update, delete, stats."""

    def __init__(self, store: ListingStore):
        self.store = store

    @_store_call
    async def list_listings(self) -> list[ListingResponse]:
        return [_to_response(item) for item in await self.store.list_with_owner()]

    @_store_call
    async def list_for_owner(self, identity: Identity) -> list[ListingResponse]:
        listings = await self.store.list_with_owner(owner_id=identity.user_id)
        return [_to_response(item) for item in listings]

    @_store_call
    async def get_by_id(self, listing_id: int) -> ListingResponse:
        listing = await self.store.get_with_owner(listing_id)
        if listing is None:
            raise NotFound(LISTING_NOT_FOUND)
        return _to_response(listing)

    @_store_call
    async def create(self, data: ListingCreate, identity: Identity) -> ListingResponse:
        """Owner always comes from the verified identity, never from the body."""
        listing = Listing(
            title=data.title,
            description=data.description,
            category=data.category,
            condition=data.condition,
            price=float(data.price),
            images=list(data.images),
            owner_id=identity.user_id,
            status=ListingStatus.AVAILABLE.value,
        )
        listing = await self.store.create(listing)
        logger.info("Listing %s created by user %s", listing.id, identity.user_id)
        return _to_response(listing)

    @_store_call
    async def update(
        self,
        listing_id: int,
        changes: Mapping[str, Any] | None,
        identity: Identity,
    ) -> ListingResponse:
        """
        Existence and ownership are settled before the body is looked at, so a
        non-owner gets 403 whatever they sent. No body means no changes.
        """
        listing = ensure_owner(await self.store.get_with_owner(listing_id), identity)
        try:
            data = ListingUpdate.model_validate(dict(changes or {}))
        except ValidationError as exc:
            raise InvalidInput(validation_message(exc.errors())) from exc
        for field, value in data.changes().items():
            setattr(listing, field, value)
        listing = await self.store.save(listing)
        return _to_response(listing)

    @_store_call
    async def delete(self, listing_id: int, identity: Identity) -> None:
        listing = ensure_owner(await self.store.get_with_owner(listing_id), identity)
        await self.store.remove(listing)
        logger.info("Listing %s deleted by user %s", listing_id, identity.user_id)

    @_store_call
    async def dashboard_stats(self, identity: Identity) -> DashboardStats:
        stats = await self.store.stats_for_owner(identity.user_id)
        return DashboardStats(
            total_listings=stats.total,
            active_listings=stats.available,
            sold_listings=stats.sold,
            total_value=f"{stats.total_value:.2f}",
        )
