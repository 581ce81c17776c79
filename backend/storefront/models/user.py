# storefront/models/user.py
"""
Database model for users.
Represents a registered account: display name, login email and the
password hash used to verify credentials.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Sessions (one-to-many, via related_name="sessions", cascade delete)
    - Has many Orders (one-to-many, via related_name="orders", cascade delete)

    Security:
    - Password is stored as an argon2 hash (never store plain text passwords)
    - Email is stored lowercased and is unique, so the unique index is the
      case-insensitive guard against two registrations with one address
    - password_hash is never serialized to clients
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=256)  # Display name
    email = fields.CharField(max_length=256, unique=True, index=True)  # Login key, lowercased
    password_hash = fields.CharField(max_length=255)  # Hashed password (argon2)
    created_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
