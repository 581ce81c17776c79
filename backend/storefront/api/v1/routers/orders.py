from typing import Optional

from fastapi import APIRouter, Depends, status

from storefront.api.v1.deps import get_current_user, get_session_id
from storefront.schemas.order import OrderEnvelope, OrderListEnvelope, PlaceOrderIn
from storefront.services import orders as order_service

# Dependencies run before the body is validated, so an unauthenticated
# request gets 401 even when its body is malformed
router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OrderEnvelope)
async def place_order(body: PlaceOrderIn, session_id: Optional[str] = Depends(get_session_id)):
    """
    Place an order for the signed-in user.

    Body:
        customer: {name, phone, address (required), email, city, state, pinCode, note}
        items: non-empty list of {id, title, category, qty}

    Returns:
        dict: {"order": stored order with server-assigned id and createdAt}

    Errors:
        400: Missing or oversized customer fields, empty items or bad quantity
        401: Not authenticated
    """
    order = await order_service.place_order(
        session_id,
        body.customer.model_dump(),
        [item.model_dump() for item in body.items],
    )
    return {"order": order}


@router.get("/me", response_model=OrderListEnvelope)
async def list_my_orders(session_id: Optional[str] = Depends(get_session_id)):
    """
    Get the signed-in user's orders, newest first (possibly empty).

    Errors:
        401: Not authenticated
    """
    return {"orders": await order_service.list_my_orders(session_id)}
