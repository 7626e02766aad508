"""Shared exceptions for service layer operations."""


class UserAlreadyExistsError(Exception):
    """Raised when registering an email that already belongs to a user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("User already exists")


class WishlistAuthorizationError(Exception):
    """
    Raised when acting on an item or link the requester does not own.

    Also raised when the target does not exist at all, so callers cannot tell
    "missing" from "belongs to someone else".
    """

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message)


class LastCategoryError(Exception):
    """Raised when deleting a category would leave the user with none."""

    def __init__(self) -> None:
        super().__init__("Cannot delete the last category")


class CategoryNotFoundError(Exception):
    """Raised when a referenced category does not exist or is not owned by the user."""

    def __init__(self, category_id: str) -> None:
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")
