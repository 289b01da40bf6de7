"""
MongoEngine document models and the signed-in user.

Connect to MongoDB via ``mongoengine.connect()`` in the application factory.
"""

from datetime import datetime

import mongoengine as me
from flask_login import UserMixin


# ---------------------------------------------------------------------------
# StoredBlob
# ---------------------------------------------------------------------------
class StoredBlob(me.Document):
    """A named text blob, the server-side home of a per-user invoice ledger."""

    meta = {"collection": "blobs"}

    key = me.StringField(required=True, unique=True, max_length=200)
    value = me.StringField(required=True)
    updated_at = me.DateTimeField(default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<StoredBlob {self.key}>"


# ---------------------------------------------------------------------------
# SessionUser
# ---------------------------------------------------------------------------
class SessionUser(UserMixin):
    """User signed in through Supabase, rebuilt from the Flask session."""

    def __init__(self, user_id: str, email: str, full_name: str = "", access_token: str = ""):
        self.id = user_id
        self.email = email
        self.full_name = full_name
        self.access_token = access_token

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def to_session(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "access_token": self.access_token,
        }

    @classmethod
    def from_session(cls, data: dict) -> "SessionUser":
        return cls(
            user_id=data["id"],
            email=data.get("email", ""),
            full_name=data.get("full_name", ""),
            access_token=data.get("access_token", ""),
        )

    def __repr__(self) -> str:
        return f"<SessionUser {self.email}>"
