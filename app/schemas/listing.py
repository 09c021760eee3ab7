"""Listing request/response schemas - REST API contract."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.db.models.listing import ListingCategory, ListingCondition, ListingStatus


class OwnerSummary(BaseModel):
    """Public projection of a listing's owner."""

    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class ListingCreate(BaseModel):
    """All fields required except images. Price accepts numeric strings ("300")."""

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: ListingCategory
    condition: ListingCondition
    price: float = Field(..., ge=0)
    images: list[str] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def _null_images_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ListingUpdate(BaseModel):
    """
    Partial update with explicit presence: a field is applied when it was sent,
    whatever its value (0, [] included). Sending null is rejected.
    owner_id and timestamps are not accepted here.
    """

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    category: ListingCategory | None = None
    condition: ListingCondition | None = None
    price: float | None = Field(None, ge=0)
    images: list[str] | None = None
    status: ListingStatus | None = None

    @model_validator(mode="after")
    def _reject_explicit_null(self) -> "ListingUpdate":
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ListingResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str
    condition: str
    price: float
    images: list[str]
    status: str
    owner_id: int
    owner: OwnerSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
