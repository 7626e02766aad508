"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from models.user import User
from models.user_session import UserSession
from models.category import WishlistCategory
from models.item import WishlistItem
from models.item_link import WishlistItemLink

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "UserSession",
    "WishlistCategory",
    "WishlistItem",
    "WishlistItemLink",
]
