"""Inventory Models - Pydantic models for data returned by the inventory service."""
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, field_validator


def to_decimal(value) -> Decimal:
    """Convert a price to Decimal via its string form to avoid float artifacts."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"invalid price: {value!r}")


class Product(BaseModel):
    """Product model. Unknown fields from the service are preserved."""
    id: int
    title: str
    price: Decimal
    image: Optional[str] = None

    class Config:
        extra = "allow"
        frozen = True

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)

    def to_dict(self) -> dict:
        """Flat JSON-safe dict including extra fields."""
        data = self.model_dump()
        data["price"] = float(self.price)
        return data


class StockRecord(BaseModel):
    """Point-in-time stock snapshot for a product."""
    id: Optional[int] = None
    amount: int

    class Config:
        extra = "ignore"
        frozen = True

    @field_validator("amount")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("amount must be non-negative")
        return v
