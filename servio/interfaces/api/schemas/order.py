"""Pydantic models for order requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class OrderCreate(BaseModel):
    channel: str = Field(default="website", min_length=1, max_length=32)
    total_amount: float = Field(..., ge=0)
    items: list[dict[str, Any]] = Field(default_factory=list)
    customer_name: str | None = Field(default=None, max_length=120)
    customer_phone: str | None = Field(default=None, max_length=32)
    customer_email: EmailStr | None = None
    external_id: str | None = Field(default=None, max_length=120)


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    channel: str
    status: str
    total_amount: float
    items: list[dict[str, Any]] = Field(default_factory=list)
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    external_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["OrderCreate", "OrderRead", "OrderStatusUpdate"]
