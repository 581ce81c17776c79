# storefront/models/order.py
"""
Database models for orders.
An order stores a snapshot of the customer's contact details taken when it
was placed, plus its line items as separate rows.
"""
from tortoise import fields, models

class Order(models.Model):
    """
    Order database model.

    Relationships:
    - Belongs to a User (many-to-one, cascade delete)
    - Has many OrderItems (one-to-many, via related_name="items", cascade delete)
    """
    id = fields.CharField(max_length=64, pk=True)  # Human-readable, time-derived id (e.g. DDD-1700000000000-a1b2c3)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="orders",
        on_delete=fields.CASCADE,
    )
    created_at = fields.DatetimeField(index=True)

    # Customer snapshot
    customer_name = fields.CharField(max_length=256)
    customer_phone = fields.CharField(max_length=64)
    customer_email = fields.CharField(max_length=256, default="")
    customer_address = fields.TextField()
    customer_city = fields.CharField(max_length=128, default="")
    customer_state = fields.CharField(max_length=128, default="")
    customer_pin_code = fields.CharField(max_length=32, default="")
    customer_note = fields.TextField(default="")

    class Meta:
        table = "orders"


class OrderItem(models.Model):
    id = fields.IntField(pk=True)
    order = fields.ForeignKeyField(
        "models.Order",
        related_name="items",
        on_delete=fields.CASCADE,
    )
    position = fields.IntField()  # Index within the submitted item list

    # Product details as they were at order time (no live catalog reference)
    product_id = fields.CharField(max_length=128)
    title = fields.CharField(max_length=512)
    category = fields.CharField(max_length=128)
    qty = fields.IntField()

    class Meta:
        table = "order_items"
