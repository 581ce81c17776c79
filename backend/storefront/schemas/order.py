# storefront/schemas/order.py
"""
Pydantic schemas for order endpoints.

Incoming values are coerced before validation: missing/null text becomes "",
other scalars are stringified and every string is trimmed. Quantities accept
integers and numeric strings; blank means 0.
"""
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value an int4 column holds
MAX_QUANTITY = 2**31 - 1

# Column widths of the order tables (see storefront.models.order)
CUSTOMER_MAX_LENGTH = {
    "name": 256,
    "phone": 64,
    "email": 256,
    "city": 128,
    "state": 128,
    "pin_code": 32,
}
ITEM_MAX_LENGTH = {
    "product_id": 128,
    "title": 512,
    "category": 128,
}


def coerce_text(value: Any, max_length: int | None = None) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValueError("expected a string")
    value = str(value).strip()
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"must be at most {max_length} characters")
    return value


def coerce_quantity(value: Any) -> int:
    """
    Coerce a quantity to a non-negative int.

    Raises:
        ValueError: For booleans, non-numeric or fractional values, negatives
            or values above MAX_QUANTITY
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole number")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
        try:
            value = float(value) if any(c in value for c in ".eE") else int(value)
        except ValueError:
            raise ValueError("quantity must be a whole number") from None
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("quantity must be a whole number")
        value = int(value)
    if not isinstance(value, int):
        raise ValueError("quantity must be a whole number")
    if value < 0:
        raise ValueError("quantity must not be negative")
    if value > MAX_QUANTITY:
        raise ValueError(f"quantity must not exceed {MAX_QUANTITY}")
    return value


class CustomerIn(BaseModel):
    """
    Customer snapshot submitted with an order.
    name, phone and address are required by the order service.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", max_length=CUSTOMER_MAX_LENGTH["name"])
    phone: str = Field(default="", max_length=CUSTOMER_MAX_LENGTH["phone"])
    email: str = Field(default="", max_length=CUSTOMER_MAX_LENGTH["email"])
    address: str = ""
    city: str = Field(default="", max_length=CUSTOMER_MAX_LENGTH["city"])
    state: str = Field(default="", max_length=CUSTOMER_MAX_LENGTH["state"])
    pin_code: str = Field(default="", alias="pinCode", max_length=CUSTOMER_MAX_LENGTH["pin_code"])  # Postal code
    note: str = ""  # Free-text delivery note

    @field_validator("*", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value)


class OrderItemIn(BaseModel):
    id: str = Field(default="", max_length=ITEM_MAX_LENGTH["product_id"])  # Product identifier
    title: str = Field(default="", max_length=ITEM_MAX_LENGTH["title"])
    category: str = Field(default="", max_length=ITEM_MAX_LENGTH["category"])
    qty: int = 0

    @field_validator("id", "title", "category", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("qty", mode="before")
    @classmethod
    def _qty(cls, value: Any) -> int:
        return coerce_quantity(value)


class PlaceOrderIn(BaseModel):
    """Request model for POST /orders."""
    customer: CustomerIn = Field(default_factory=CustomerIn)
    items: List[OrderItemIn] = Field(default_factory=list)

    @field_validator("customer", mode="before")
    @classmethod
    def _customer(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, value: Any) -> Any:
        # A missing or non-list value is an empty order; the service rejects it
        return value if isinstance(value, list) else []


class CustomerOut(BaseModel):
    name: str
    phone: str
    email: str
    address: str
    city: str
    state: str
    pinCode: str
    note: str


class OrderItemOut(BaseModel):
    id: str
    title: str
    category: str
    qty: int


class OrderOut(BaseModel):
    """
    Order as returned to clients.
    createdAt is ISO-8601 UTC with millisecond precision.
    """
    id: str
    createdAt: str
    customer: CustomerOut
    items: List[OrderItemOut]


class OrderEnvelope(BaseModel):
    order: OrderOut


class OrderListEnvelope(BaseModel):
    orders: List[OrderOut]
