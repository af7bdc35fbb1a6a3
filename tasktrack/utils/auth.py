from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from tasktrack import config

# Fixed cost so every hash (and every verification) costs the same.
BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class InvalidTokenError(Exception):
    """Token failed verification. ``reason`` is "expired" or "malformed"."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"token {reason}")


def hash_password(password: str) -> str:
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    to allow the caller to respond with an authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def issue_token(user_id: str, email: str) -> str:
    # expiry and secret are read at call time so runtime overrides take effect
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, config.require_secret(), algorithm=config.ALGORITHM)


def verify_token(token: str) -> dict:
    """Return the token's claims, or raise InvalidTokenError."""
    try:
        # jwt.decode validates exp automatically
        claims = jwt.decode(token, config.require_secret(), algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        raise InvalidTokenError("expired")
    except JWTError:
        raise InvalidTokenError("malformed")
    if not claims.get("sub"):
        raise InvalidTokenError("malformed")
    return claims
