# storefront/services/store.py
"""
Persistent store for users, sessions and orders.

All reads and writes of the service go through these functions. Multi-row
writes run inside a single database transaction; referential cleanup (user
-> sessions/orders -> items) is left to the ON DELETE CASCADE constraints.

Any ORM failure is logged and re-raised as StorageError so callers never see
driver details. A unique-email violation is the one integrity error with a
meaning of its own and surfaces as ConflictError.
"""
import datetime as dt
import functools
import logging
import uuid
from typing import Any, Optional

from tortoise.exceptions import BaseORMException, IntegrityError
from tortoise.query_utils import Prefetch
from tortoise.transactions import in_transaction

from storefront.core.clock import as_utc, utc_now
from storefront.core.errors import ConflictError, ServiceError, StorageError
from storefront.core.security import new_session_id
from storefront.models.order import Order, OrderItem
from storefront.models.session import Session
from storefront.models.user import User

logger = logging.getLogger("uvicorn.error")

# Customer snapshot keys and the Order columns that hold them
CUSTOMER_COLUMNS = {
    "name": "customer_name",
    "phone": "customer_phone",
    "email": "customer_email",
    "address": "customer_address",
    "city": "customer_city",
    "state": "customer_state",
    "pin_code": "customer_pin_code",
    "note": "customer_note",
}


def _guarded(fn):
    """Translate ORM exceptions raised by a store function into StorageError."""
    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except ServiceError:
            raise
        except BaseORMException as exc:
            logger.exception("[store] %s failed", fn.__name__)
            raise StorageError() from exc
    return wrapper


def transaction():
    """
    Open an atomic unit of work.

    Usage:
        async with transaction() as conn:
            user = await create_user(..., using_db=conn)
            await create_session(user.id, using_db=conn)
    """
    return in_transaction()


# ------------------------------------------------------------------------------
# Users
# ------------------------------------------------------------------------------
@_guarded
async def create_user(name: str, email: str, password_hash: str, using_db=None) -> User:
    """
    Insert a new user row.

    The unique index on users.email is the race-free uniqueness check:
    of two concurrent inserts with one address only one can commit.

    Raises:
        ConflictError: If the email is already registered
    """
    try:
        return await User.create(
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=utc_now(),
            using_db=using_db,
        )
    except IntegrityError as exc:
        raise ConflictError() from exc


@_guarded
async def find_user_by_email(email: str) -> Optional[User]:
    return await User.get_or_none(email=email)


@_guarded
async def find_user_by_id(user_id: str | uuid.UUID) -> Optional[User]:
    try:
        user_id = uuid.UUID(str(user_id))
    except ValueError:
        return None
    return await User.get_or_none(id=user_id)


@_guarded
async def delete_user(user_id: str | uuid.UUID) -> bool:
    """
    Delete a user. Sessions, orders and order items go with it via cascade.

    Returns:
        True if a user row was deleted
    """
    try:
        user_id = uuid.UUID(str(user_id))
    except ValueError:
        return False
    deleted = await User.filter(id=user_id).delete()
    return deleted > 0


# ------------------------------------------------------------------------------
# Sessions
# ------------------------------------------------------------------------------
@_guarded
async def create_session(user_id: str | uuid.UUID, using_db=None) -> str:
    session_id = new_session_id()
    await Session.create(
        id=session_id,
        user_id=user_id,
        created_at=utc_now(),
        using_db=using_db,
    )
    return session_id


@_guarded
async def find_session_user(
    session_id: str,
    max_age: Optional[dt.timedelta] = None,
) -> Optional[User]:
    """
    Resolve a session token to its user in one joined lookup.

    Args:
        session_id: Token from the session cookie
        max_age: If given, sessions older than this are treated as absent
            and removed

    Returns:
        The owning User, or None if the session is unknown or expired
    """
    session = await Session.filter(id=session_id).select_related("user").first()
    if session is None:
        return None
    if max_age is not None and as_utc(session.created_at) < utc_now() - max_age:
        await Session.filter(id=session_id).delete()
        logger.info("[store] expired session removed for user=%s", session.user_id)
        return None
    return session.user


@_guarded
async def delete_session(session_id: str) -> None:
    # Deleting an unknown session is not an error
    await Session.filter(id=session_id).delete()


@_guarded
async def purge_expired_sessions(cutoff: dt.datetime) -> int:
    """Delete every session created before cutoff; returns the number removed."""
    return await Session.filter(created_at__lt=cutoff).delete()


# ------------------------------------------------------------------------------
# Orders
# ------------------------------------------------------------------------------
@_guarded
async def create_order(
    order_id: str,
    user_id: str | uuid.UUID,
    created_at: dt.datetime,
    customer: dict[str, str],
    items: list[dict[str, Any]],
) -> Order:
    """
    Insert an order header and all of its items as one transaction.

    Args:
        customer: Snapshot keyed like CUSTOMER_COLUMNS
        items: Dicts with product_id, title, category, qty, in display order

    Returns:
        The stored Order (items are not attached)
    """
    columns = {column: customer.get(key, "") for key, column in CUSTOMER_COLUMNS.items()}
    async with in_transaction() as conn:
        order = await Order.create(
            id=order_id,
            user_id=user_id,
            created_at=created_at,
            using_db=conn,
            **columns,
        )
        await OrderItem.bulk_create(
            [
                OrderItem(
                    order_id=order_id,
                    position=position,
                    product_id=item["product_id"],
                    title=item["title"],
                    category=item["category"],
                    qty=item["qty"],
                )
                for position, item in enumerate(items)
            ],
            using_db=conn,
        )
    return order


@_guarded
async def list_orders_for_user(user_id: str | uuid.UUID) -> list[Order]:
    """
    Get all orders of a user, newest first, with their items prefetched
    in submission order (iterate order.items).
    """
    return await (
        Order.filter(user_id=user_id)
        .order_by("-created_at", "-id")
        .prefetch_related(Prefetch("items", queryset=OrderItem.all().order_by("position")))
    )
