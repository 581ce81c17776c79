import datetime as dt
import uuid

import pytest
from tortoise.exceptions import IntegrityError

from storefront.core.clock import utc_now
from storefront.core.errors import ConflictError, StorageError
from storefront.core.security import hash_password
from storefront.models import Order, OrderItem, Session
from storefront.services import store


pytestmark = pytest.mark.asyncio


CUSTOMER = {
    "name": "Jane Doe",
    "phone": "9876543210",
    "email": "jane@example.com",
    "address": "1 Main St",
    "city": "Pune",
    "state": "MH",
    "pin_code": "411001",
    "note": "ring twice",
}


def _items(*titles):
    return [
        {"product_id": f"p{i}", "title": title, "category": "misc", "qty": i + 1}
        for i, title in enumerate(titles)
    ]


async def _user(email="bob@example.com"):
    return await store.create_user("Bob", email, hash_password("pw"))


async def test_create_and_find_user(db):
    user = await _user()
    assert user.created_at is not None

    by_email = await store.find_user_by_email("bob@example.com")
    by_id = await store.find_user_by_id(str(user.id))
    assert by_email.id == user.id
    assert by_id.id == user.id

    assert await store.find_user_by_email("nobody@example.com") is None
    assert await store.find_user_by_id(uuid.uuid4()) is None
    assert await store.find_user_by_id("not-a-uuid") is None


async def test_duplicate_email_is_conflict(db):
    await _user()
    with pytest.raises(ConflictError):
        await _user()


async def test_session_lifecycle(db):
    user = await _user()
    sid = await store.create_session(user.id)

    found = await store.find_session_user(sid)
    assert found.id == user.id

    await store.delete_session(sid)
    assert await store.find_session_user(sid) is None
    # Idempotent
    await store.delete_session(sid)


async def test_expired_session_resolves_to_nothing_and_is_removed(db):
    user = await _user()
    sid = await store.create_session(user.id)
    await Session.filter(id=sid).update(created_at=utc_now() - dt.timedelta(days=8))

    assert (await store.find_session_user(sid)).id == user.id  # no max age given
    assert await store.find_session_user(sid, max_age=dt.timedelta(days=7)) is None
    assert not await Session.filter(id=sid).exists()


async def test_purge_expired_sessions(db):
    user = await _user()
    old = await store.create_session(user.id)
    fresh = await store.create_session(user.id)
    await Session.filter(id=old).update(created_at=utc_now() - dt.timedelta(days=30))

    removed = await store.purge_expired_sessions(utc_now() - dt.timedelta(days=7))
    assert removed == 1
    assert await store.find_session_user(old) is None
    assert (await store.find_session_user(fresh)).id == user.id


async def test_create_order_and_list_newest_first(db):
    user = await _user()
    first = await store.create_order("DDD-1", user.id, utc_now() - dt.timedelta(minutes=1), CUSTOMER, _items("a", "b", "c"))
    second = await store.create_order("DDD-2", user.id, utc_now(), CUSTOMER, _items("z"))
    assert first.customer_pin_code == "411001"

    orders = await store.list_orders_for_user(user.id)
    assert [o.id for o in orders] == [second.id, first.id]
    assert [i.title for i in orders[1].items] == ["a", "b", "c"]
    assert [i.qty for i in orders[1].items] == [1, 2, 3]


async def test_list_orders_only_returns_own_orders(db):
    bob = await _user()
    eve = await _user("eve@example.com")
    await store.create_order("DDD-1", bob.id, utc_now(), CUSTOMER, _items("a"))

    assert await store.list_orders_for_user(eve.id) == []


async def test_failed_item_insert_leaves_no_partial_order(db, monkeypatch):
    user = await _user()

    async def failing_bulk_create(*args, **kwargs):
        raise IntegrityError("order_items insert failed")

    monkeypatch.setattr(OrderItem, "bulk_create", failing_bulk_create)

    with pytest.raises(StorageError):
        await store.create_order("DDD-9", user.id, utc_now(), CUSTOMER, _items("a", "b"))

    assert not await Order.filter(id="DDD-9").exists()
    assert not await OrderItem.filter(order_id="DDD-9").exists()


async def test_duplicate_order_id_is_storage_error(db):
    user = await _user()
    await store.create_order("DDD-1", user.id, utc_now(), CUSTOMER, _items("a"))
    with pytest.raises(StorageError):
        await store.create_order("DDD-1", user.id, utc_now(), CUSTOMER, _items("b"))

    orders = await store.list_orders_for_user(user.id)
    assert len(orders) == 1
    assert [i.title for i in orders[0].items] == ["a"]


async def test_delete_user_cascades(db):
    user = await _user()
    sid = await store.create_session(user.id)
    await store.create_order("DDD-1", user.id, utc_now(), CUSTOMER, _items("a", "b"))

    assert await store.delete_user(user.id) is True

    assert await store.find_session_user(sid) is None
    assert not await Session.filter(id=sid).exists()
    assert not await Order.filter(id="DDD-1").exists()
    assert not await OrderItem.filter(order_id="DDD-1").exists()
    assert await store.delete_user(user.id) is False
