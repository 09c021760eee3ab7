"""
FastAPI dependencies - injection for auth, services and the media host (SOLID: Dependency Inversion).
Challenge: Reusable auth, consistent error responses.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import Identity, verify_token
from app.db.repositories.listing_repository import ListingRepository
from app.db.session import DbSession
from app.media.cloudinary_client import CloudinaryMediaHost, get_media_host
from app.services.listing_service import ListingService

security = HTTPBearer(auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Resolve bearer JWT to an Identity. 401 if missing, 403 if invalid."""
    identity = verify_token(credentials.credentials if credentials else None)
    request.state.identity = identity
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_listing_service(session: DbSession) -> ListingService:
    """Factory for the service with its store injected (Dependency Inversion)."""
    return ListingService(ListingRepository(session))


ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
MediaHostDep = Annotated[CloudinaryMediaHost, Depends(get_media_host)]
