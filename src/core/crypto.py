"""Password hashing and session token generation."""
import secrets

from passlib.context import CryptContext

# Rounds and salt are embedded in every hash, so these only affect new hashes.
PBKDF2_ROUNDS = 100_000
SALT_SIZE = 16

SESSION_ID_BYTES = 32

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    pbkdf2_sha256__default_rounds=PBKDF2_ROUNDS,
    pbkdf2_sha256__salt_size=SALT_SIZE,
)


def hash_password(password: str) -> str:
    """
    Hash a password with PBKDF2-SHA256 and a random per-call salt.

    Returns:
        The modular crypt string ``$pbkdf2-sha256$<rounds>$<salt>$<digest>``. The
        salt and rounds travel with the hash, so verification needs nothing else.
    """
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a value produced by hash_password.

    Never raises: malformed or unrecognized hashes simply fail verification.
    """
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def generate_session_id() -> str:
    """Generate a 256-bit URL-safe session token (43 characters, no padding)."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)
