"""Pydantic models for publishing domain events over HTTP."""

from typing import Any

from pydantic import BaseModel, Field


class EventPublish(BaseModel):
    """A domain event emitted on behalf of the authenticated user's restaurant."""

    type: str = Field(..., min_length=1, max_length=64, examples=["inventory.low_stock"])
    payload: dict[str, Any] = Field(default_factory=dict)


class EventAccepted(BaseModel):
    type: str
    listeners: int


__all__ = ["EventAccepted", "EventPublish"]
