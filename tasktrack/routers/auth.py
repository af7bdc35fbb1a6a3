import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from tasktrack.database import get_db
from tasktrack.errors import AuthenticationError, DuplicateResourceError, ValidationError
from tasktrack.models.user import User
from tasktrack.routers.deps import auth_rate_limit, read_json_body
from tasktrack.schemas.user import AuthResponse, UserOut
from tasktrack.utils.auth import hash_password, issue_token, verify_password
from tasktrack.validators.auth import validate_login, validate_register

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"], dependencies=[Depends(auth_rate_limit)])

# same message for unknown email and wrong password
BAD_CREDENTIALS = "Invalid email or password"


def _auth_response(user: User, message: str) -> AuthResponse:
    return AuthResponse(message=message, token=issue_token(user.id, user.email), user=UserOut.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: Request, db: AsyncSession = Depends(get_db)):
    checked = validate_register(await read_json_body(request))
    if not checked.ok:
        raise ValidationError(errors=checked.errors)
    data = checked.data

    exists = await db.scalar(select(User).where(User.email == data["email"]))
    if exists:
        raise DuplicateResourceError("User with this email already exists")

    hashed = await run_in_threadpool(hash_password, data["password"])
    new_user = User(name=data["name"], email=data["email"], password_hash=hashed)
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        await db.rollback()
        raise DuplicateResourceError("User with this email already exists")
    await db.refresh(new_user)

    logger.info("registered user %s", new_user.id)
    return _auth_response(new_user, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
async def login(request: Request, db: AsyncSession = Depends(get_db)):
    checked = validate_login(await read_json_body(request))
    if not checked.ok:
        raise ValidationError(errors=checked.errors)
    data = checked.data

    db_user = await db.scalar(select(User).where(User.email == data["email"]))
    if not db_user or not await run_in_threadpool(verify_password, data["password"], db_user.password_hash):
        logger.info("failed login attempt")
        raise AuthenticationError(BAD_CREDENTIALS)

    return _auth_response(db_user, "Login successful")
