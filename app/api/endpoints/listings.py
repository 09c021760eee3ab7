"""
Listing CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Challenge: Public reads, authenticated writes, owner-only mutation.
Design: Thin controller; ListingService holds the ownership rules.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from app.core.dependencies import CurrentIdentity, ListingServiceDep
from app.schemas.listing import ListingCreate, ListingResponse, MessageResponse

router = APIRouter()


@router.get("", response_model=list[ListingResponse])
async def list_listings(svc: ListingServiceDep):
    """All listings, newest first, with owner name and email."""
    return await svc.list_listings()


# Declared before /{listing_id} so "user" is never read as an id.
@router.get("/user/me", response_model=list[ListingResponse])
async def list_my_listings(svc: ListingServiceDep, identity: CurrentIdentity):
    return await svc.list_for_owner(identity)


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(svc: ListingServiceDep, listing_id: int):
    return await svc.get_by_id(listing_id)


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(svc: ListingServiceDep, identity: CurrentIdentity, data: ListingCreate):
    """Create listing (authenticated). Owner is taken from the token only."""
    return await svc.create(data, identity)


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    svc: ListingServiceDep,
    identity: CurrentIdentity,
    listing_id: int,
    data: Annotated[dict[str, Any] | None, Body()] = None,
):
    """
    Owner-only partial update: fields present in the body replace stored values.
    The body is validated by the service after the ownership check.
    """
    return await svc.update(listing_id, data, identity)


@router.delete("/{listing_id}", response_model=MessageResponse)
async def delete_listing(svc: ListingServiceDep, identity: CurrentIdentity, listing_id: int):
    await svc.delete(listing_id, identity)
    return MessageResponse(message="Listing deleted")
