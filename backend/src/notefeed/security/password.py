"""Password hashing for user accounts."""

from passlib.context import CryptContext

from ..config import get_settings

# bcrypt_sha256 pre-hashes with SHA-256, so passwords past 72 bytes still count
pwd_context = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__rounds=get_settings().password_hash_rounds,
)


def hash_password(password: str) -> str:
    """Salted hash stored as ``users.password_hash``."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a login attempt; malformed stored hashes never match."""
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        return False
