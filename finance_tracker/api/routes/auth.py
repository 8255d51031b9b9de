# finance_tracker/api/routes/auth.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.api.deps import get_current_identity_detailed, get_token_service
from finance_tracker.core.database import get_async_session
from finance_tracker.core.errors import AuthenticationError, ConflictError, NotFoundError, ServerConfigurationError
from finance_tracker.core.security import TokenIdentity, TokenService, dummy_verify, verify_password
from finance_tracker.crud.user import create_user, get_user_by_email, get_user_by_id
from finance_tracker.schemas.common import MessageResponse
from finance_tracker.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _invalid_credentials() -> AuthenticationError:
    # One error for "no such user" and "wrong password"
    return AuthenticationError("INVALID_CREDENTIALS", "Invalid credentials")


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Create an account and return it together with a fresh token."""
    signup_in = SignupRequest.from_payload(payload)

    # Refuse before writing anything, so no account exists without a usable token
    if not token_service.is_configured:
        raise ServerConfigurationError("Token signing key is not configured")

    if await get_user_by_email(signup_in.email, db) is not None:
        raise ConflictError("EMAIL_EXISTS", "Email already exists")

    try:
        user = await create_user(signup_in.name, signup_in.email, signup_in.password, db)
    except IntegrityError:
        # Lost a race with a concurrent signup for the same address
        await db.rollback()
        raise ConflictError("EMAIL_EXISTS", "Email already exists")
    logger.info(f"User {user.id} signed up")

    token = token_service.issue(user.id, user.email)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
    token_service: TokenService = Depends(get_token_service),
):
    login_in = LoginRequest.from_payload(payload)

    user = await get_user_by_email(login_in.email, db)
    if user is None:
        await run_in_threadpool(dummy_verify)
        raise _invalid_credentials()
    # bcrypt is CPU-bound; keep it off the event loop
    if not await run_in_threadpool(verify_password, login_in.password, user.hashed_password):
        logger.info(f"Failed login for user {user.id}")
        raise _invalid_credentials()

    token = token_service.issue(user.id, user.email)
    logger.info(f"User {user.id} logged in")
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """
    Stateless logout. Tokens are not tracked server-side, so there is nothing
    to revoke: the client drops its token and it lapses at its natural expiry.
    """
    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=UserRead)
async def read_profile(
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity_detailed),
):
    user = await get_user_by_id(identity.user_id, db)
    if user is None:
        raise NotFoundError("USER_NOT_FOUND", "User not found")
    return user
