"""
Auth endpoints - registration and login (RESTful API).
Challenge: Secure auth, validation, clear status codes.
"""

import logging

from fastapi import APIRouter, status

from app.core.errors import Conflict, Unauthenticated
from app.core.security import create_access_token, hash_password, verify_password
from app.db.repositories.user_repository import UserRepository
from app.db.session import DbSession
from app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(session: DbSession, data: UserCreate):
    """Create new user. Returns user without password."""
    repo = UserRepository(session)
    if await repo.get_by_email(data.email):
        raise Conflict("Email already registered")
    user = await repo.register(name=data.name, email=data.email, hashed_password=hash_password(data.password))
    logger.info("Registered user %s", user.id)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(session: DbSession, data: LoginRequest):
    """Authenticate and return JWT."""
    repo = UserRepository(session)
    user = await repo.get_login_candidate(data.email)
    if user is None or not verify_password(data.password, user.hashed_password):
        raise Unauthenticated("Invalid email or password")
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )
