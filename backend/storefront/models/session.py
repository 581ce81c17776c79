# storefront/models/session.py
"""
Database model for login sessions.
A session row maps an opaque cookie token to the user it authenticates.
"""
from tortoise import fields, models

class Session(models.Model):
    """
    Session database model.

    The primary key is the random token handed to the browser. Deleting the
    row (logout) or its user (cascade) makes the token unusable for good.
    """
    id = fields.CharField(max_length=64, pk=True)  # Opaque session token
    user = fields.ForeignKeyField(
        "models.User",
        related_name="sessions",
        on_delete=fields.CASCADE,
    )  # Owning user; cascade delete
    created_at = fields.DatetimeField(auto_now_add=True, index=True)  # Used for server-side expiry

    class Meta:
        table = "sessions"
