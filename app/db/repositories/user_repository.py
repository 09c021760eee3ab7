"""
User repository - account lookups for registration and login.
Emails are matched case-insensitively; "Ada@Example.com" and "ada@example.com" are one account.
"""

from sqlalchemy import func, select

from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == normalize_email(email))
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_login_candidate(self, email: str) -> User | None:
        """Account that may sign in: exists and is not deactivated."""
        user = await self.get_by_email(email)
        if user is None or not user.is_active:
            return None
        return user

    async def register(self, *, name: str, email: str, hashed_password: str) -> User:
        """Persist a new account with its email stored normalized."""
        user = User(name=name.strip(), email=normalize_email(email), hashed_password=hashed_password)
        return await self.add(user)
