"""
StudySphere Backend: Order Schemas
====================================

What:  Pydantic models for placing and reading orders.

Checkout rules enforced here (422 on failure):
    - name:    letters, spaces, apostrophes and hyphens
    - phone:   7 to 15 digits, optional leading '+', spaces ignored
    - lessons: at least one line item, each for at least one space
"""

import re
import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

from app.schemas.lesson import INT32_MAX, INT32_MIN

NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z '\-]*$")
PHONE_PATTERN = re.compile(r"^\+?\d{7,15}$")


class OrderItem(BaseModel):
    """One line of an order: how many spaces of which lesson."""

    lesson_id: int = Field(ge=INT32_MIN, le=INT32_MAX, description="Identifier of the booked lesson")
    spaces: int = Field(ge=1, le=INT32_MAX, description="Number of spaces booked")


class OrderCreate(BaseModel):
    """Body of POST /api/orders."""

    name: str = Field(min_length=1, max_length=120, description="Customer name")
    phone: str = Field(description="Customer phone number")
    lessons: List[OrderItem] = Field(min_length=1, description="Booked lessons")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names are letters only, allowing spaces, apostrophes and hyphens."""
        v = v.strip()
        if not NAME_PATTERN.match(v):
            raise ValueError("Name must contain letters only")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Phone numbers are digits with an optional leading '+'."""
        v = v.replace(" ", "")
        if not PHONE_PATTERN.match(v):
            raise ValueError("Phone must be 7 to 15 digits")
        return v


class OrderResponse(BaseModel):
    """An order as stored."""

    id: uuid.UUID = Field(description="Order identifier")
    name: str
    phone: str
    lessons: List[OrderItem]
    total_spaces: int = Field(description="Sum of spaces over all line items")
    created_at: datetime = Field(description="When the order was placed (UTC)")

    model_config = {"from_attributes": True}


class OrderListResponse(BaseModel):
    """Response of GET /api/orders."""

    orders: List[OrderResponse]
    total_count: int = Field(description="Number of orders stored")
