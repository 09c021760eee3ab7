"""
Pytest fixtures - test DB, client, users, auth headers, fake media host.
Challenge: Isolated tests; every test gets a fresh in-memory database.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.models import User
from app.db.session import get_db
from app.main import app
from app.media.cloudinary_client import get_media_host
from tests.fakes import FakeMediaHost

# One shared connection so the schema and the session see the same in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest.fixture
def media_host() -> FakeMediaHost:
    return FakeMediaHost()


@pytest_asyncio.fixture
async def client(session: AsyncSession, media_host: FakeMediaHost):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_host] = lambda: media_host
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, name: str, email: str) -> User:
    user = User(name=name, email=email, hashed_password=hash_password("password123"))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def seller(session: AsyncSession) -> User:
    return await _make_user(session, "Ada Seller", "ada@example.com")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await _make_user(session, "Bob Buyer", "bob@example.com")


@pytest.fixture
def auth_headers(seller: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(seller.id)}"}


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def laptop() -> dict:
    return {
        "title": "Laptop",
        "description": "Used",
        "category": "computers",
        "condition": "good",
        "price": 300,
    }
