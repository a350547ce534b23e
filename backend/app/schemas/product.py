from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductCreate(BaseModel):
    # Raw JSON values, checked by app.services.validation
    name: Any = None
    price: Any = None
    description: Any = None
    category: Any = None


class ProductUpdate(BaseModel):
    name: Any = None
    price: Any = None
    description: Any = None
    category: Any = None


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    description: str | None = None
    category: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands stored UTC timestamps back without tzinfo
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ProductResponse(BaseModel):
    message: str
    product: ProductOut


class MessageResponse(BaseModel):
    message: str


class ProductListResponse(BaseModel):
    total_items: int = Field(serialization_alias="totalItems")
    total_pages: int = Field(serialization_alias="totalPages")
    current_page: int = Field(serialization_alias="currentPage")
    products: list[ProductOut]
