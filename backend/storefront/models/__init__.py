# storefront/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Registered account
- Session: Login session token owned by a User
- Order: Order header with customer snapshot
- OrderItem: Line item belonging to an Order
"""
from .user import User
from .session import Session
from .order import Order, OrderItem
