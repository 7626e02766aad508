"""Length checks shared by the REST and GraphQL adapters."""

# Mirrors the column sizes in models/ so oversize input is a validation error, not a
# database error.
MAX_CATEGORY_NAME_LENGTH = 100
MAX_COLOR_LENGTH = 32
MAX_TITLE_LENGTH = 500
MAX_EMAIL_LENGTH = 255
MAX_USER_NAME_LENGTH = 255


def validate_max_length(label: str, value: str | None, max_length: int) -> str | None:
    """Raise ValueError when value is longer than max_length characters."""
    if value is not None and len(value) > max_length:
        raise ValueError(
            f"{label} exceeds maximum length of {max_length:,} characters "
            f"(got {len(value):,} characters).",
        )
    return value


def validate_category_fields(name: str | None, color: str | None) -> None:
    """Validate category name and color lengths."""
    validate_max_length("Name", name, MAX_CATEGORY_NAME_LENGTH)
    validate_max_length("Color", color, MAX_COLOR_LENGTH)


def validate_title_length(title: str | None) -> str | None:
    """Validate that an item title fits its column."""
    return validate_max_length("Title", title, MAX_TITLE_LENGTH)


def validate_registration_fields(email: str, name: str) -> None:
    """Validate email and display name lengths."""
    validate_max_length("Email", email, MAX_EMAIL_LENGTH)
    validate_max_length("Name", name, MAX_USER_NAME_LENGTH)
