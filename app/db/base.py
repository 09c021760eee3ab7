"""
SQLAlchemy declarative base shared by all models and Alembic migrations.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models (users, listings)."""
