"""Password hashing and session token signing."""
import base64
import hmac
import hashlib
import logging

from passlib.context import CryptContext

log = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72
DEFAULT_BCRYPT_ROUNDS = 10

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=DEFAULT_BCRYPT_ROUNDS,
)


def configure_password_hashing(rounds: int) -> None:
    """Set the bcrypt work factor for new hashes; existing hashes still verify."""
    pwd_context.update(bcrypt__rounds=rounds)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check a password against a stored hash; any malformed hash is a mismatch."""
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        log.warning("Stored password hash could not be verified")
        return False


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


# Signed token: base64(value).hmac
def _signature(payload: bytes, secret_key: str) -> str:
    return hmac.new(secret_key.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def sign_token(value: str, secret_key: str) -> str:
    payload = value.encode("utf-8")
    return base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=") + "." + _signature(payload, secret_key)


def unsign_token(token: str | None, secret_key: str) -> str | None:
    """Verify the signature and return the original value; None if invalid."""
    if not token or "." not in token:
        return None
    try:
        encoded, sig = token.rsplit(".", 1)
        pad = 4 - len(encoded) % 4
        if pad != 4:
            encoded += "=" * pad
        payload = base64.urlsafe_b64decode(encoded)
        if not hmac.compare_digest(_signature(payload, secret_key), sig):
            return None
        return payload.decode("utf-8")
    except (ValueError, TypeError):
        return None
