import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.database import SessionLocal, get_db
from tasktrack.errors import AuthenticationError, RateLimitError, ValidationError
from tasktrack.models.user import User
from tasktrack.schemas.common import FieldError
from tasktrack.services.task_repository import TaskRepository
from tasktrack.utils.auth import InvalidTokenError, verify_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    name: str


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    if not authorization:
        raise AuthenticationError("No token provided")
    token = _extract_bearer(authorization)
    if token is None:
        raise AuthenticationError('Authorization header must start with "Bearer "')
    try:
        claims = verify_token(token)
    except InvalidTokenError as e:
        logger.info("rejected bearer token: %s", e.reason)
        raise AuthenticationError("Invalid or expired token")

    user = await db.get(User, claims["sub"])
    if user is None:
        raise AuthenticationError("User not found")
    return Identity(id=user.id, email=user.email, name=user.name)


def get_task_repository() -> TaskRepository:
    return TaskRepository(SessionLocal)


def auth_rate_limit(request: Request, response: Response) -> None:
    limiter = request.app.state.auth_limiter
    key = request.client.host if request.client else "unknown"
    allowed = limiter.hit(key)
    response.headers["RateLimit-Limit"] = str(limiter.max_hits)
    response.headers["RateLimit-Remaining"] = str(limiter.remaining(key))
    if not allowed:
        logger.warning("auth rate limit exceeded for %s", key)
        raise RateLimitError("Too many authentication attempts, please try again later.")


async def read_json_body(request: Request):
    """Decode the request body inside the handler, after the route dependencies ran.

    An empty body is None; anything that is not JSON is a ValidationError.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return await request.json()
    except ValueError:
        raise ValidationError(errors=[FieldError(field="body", message="Request body must be valid JSON")])
