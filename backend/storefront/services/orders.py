# storefront/services/orders.py
"""
Order service: place an order for the signed-in user and list their orders.
"""
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from storefront.config import settings
from storefront.core.clock import to_iso, utc_now
from storefront.core.errors import ValidationError
from storefront.core.security import new_order_id
from storefront.models.order import Order, OrderItem
from storefront.schemas.order import (
    CUSTOMER_MAX_LENGTH,
    ITEM_MAX_LENGTH,
    coerce_quantity,
    coerce_text,
)
from storefront.services import identity, store

logger = logging.getLogger("uvicorn.error")

REQUIRED_CUSTOMER_FIELDS = ("name", "phone", "address")


def _customer_snapshot(customer: Mapping[str, Any]) -> dict[str, str]:
    if not isinstance(customer, Mapping):
        raise ValueError("expected an object")
    # Accept both the JSON key (pinCode) and the python name (pin_code)
    values = dict(customer)
    values.setdefault("pin_code", values.get("pinCode"))
    return {
        key: coerce_text(values.get(key), CUSTOMER_MAX_LENGTH.get(key))
        for key in store.CUSTOMER_COLUMNS
    }


def _item_rows(items: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    rows = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"items[{index}]: expected an object")
        try:
            rows.append({
                "product_id": coerce_text(item.get("id", item.get("product_id")), ITEM_MAX_LENGTH["product_id"]),
                "title": coerce_text(item.get("title"), ITEM_MAX_LENGTH["title"]),
                "category": coerce_text(item.get("category"), ITEM_MAX_LENGTH["category"]),
                "qty": coerce_quantity(item.get("qty")),
            })
        except ValueError as exc:
            raise ValidationError(f"items[{index}]: {exc}") from None
    return rows


def order_to_dict(order: Order, items: Iterable[OrderItem | Mapping[str, Any]]) -> dict:
    """
    Convert an order and its items to the client representation.

    Args:
        order: Order model instance
        items: OrderItem instances, or row dicts as built by _item_rows

    Returns:
        dict: {id, createdAt, customer: {...}, items: [...]}
    """
    out_items = []
    for item in items:
        if isinstance(item, OrderItem):
            item = {"product_id": item.product_id, "title": item.title,
                    "category": item.category, "qty": item.qty}
        out_items.append({
            "id": item["product_id"],
            "title": item["title"],
            "category": item["category"],
            "qty": item["qty"],
        })
    return {
        "id": order.id,
        "createdAt": to_iso(order.created_at),
        "customer": {
            "name": order.customer_name,
            "phone": order.customer_phone,
            "email": order.customer_email,
            "address": order.customer_address,
            "city": order.customer_city,
            "state": order.customer_state,
            "pinCode": order.customer_pin_code,
            "note": order.customer_note,
        },
        "items": out_items,
    }


async def place_order(
    session_id: Optional[str],
    customer: Optional[Mapping[str, Any]],
    items: Optional[Sequence[Mapping[str, Any]]],
) -> dict:
    """
    Validate and store an order for the user behind session_id.

    Args:
        session_id: Session token from the cookie
        customer: Customer snapshot (name, phone, address required)
        items: Non-empty list of {id, title, category, qty}

    Returns:
        dict: The stored order, as order_to_dict renders it

    Raises:
        Unauthenticated (401): If the session does not resolve
        ValidationError (400): Missing or oversized customer fields, empty item
            list, or an item that is not an object or has a bad quantity
    """
    user = await identity.current_user(session_id)

    try:
        snapshot = _customer_snapshot(customer or {})
    except ValueError as exc:
        raise ValidationError(f"customer: {exc}") from None
    if not all(snapshot[key] for key in REQUIRED_CUSTOMER_FIELDS):
        raise ValidationError("customer name, phone, and address are required")
    if not items:
        raise ValidationError("at least one order item is required")
    rows = _item_rows(items)

    order = await store.create_order(
        order_id=new_order_id(settings.order_id_prefix),
        user_id=user.id,
        created_at=utc_now(),
        customer=snapshot,
        items=rows,
    )
    logger.info("[orders] placed order id=%s user=%s items=%d", order.id, user.id, len(rows))
    return order_to_dict(order, rows)


async def list_my_orders(session_id: Optional[str]) -> list[dict]:
    """
    Get the signed-in user's orders, newest first. Empty list if none.

    Raises:
        Unauthenticated (401): If the session does not resolve
    """
    user = await identity.current_user(session_id)
    orders = await store.list_orders_for_user(user.id)
    return [order_to_dict(o, sorted(o.items, key=lambda item: item.position)) for o in orders]
