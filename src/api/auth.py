"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth import create_access_token, get_current_user, verify_password
from src.db import get_db
from src.db.crud import create_user, find_conflicting_user, get_user, get_user_by_email
from src.models.schemas import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MeResponse,
    SignupRequest,
    SignupResponse,
    UserProfile,
)
from src.models.user import User
from src.utils.logging import get_logger
from src.utils.metrics import metrics

router = APIRouter()
logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SignupResponse:
    """Register a new account. No token is issued; the client logs in next."""
    existing = await find_conflicting_user(db, data.email, data.username)
    if existing:
        metrics.auth_events_total.inc(event="signup", outcome="conflict")
        if existing.email == data.email.lower():
            raise HTTPException(status_code=400, detail="Email already registered")
        raise HTTPException(status_code=400, detail="Username already taken")

    try:
        user = await create_user(db, data)
    except IntegrityError:
        # A concurrent signup claimed the email or username first
        await db.rollback()
        metrics.auth_events_total.inc(event="signup", outcome="conflict")
        raise HTTPException(status_code=400, detail="Email or username already registered")

    metrics.auth_events_total.inc(event="signup", outcome="success")
    logger.info(f"New user registered: {user.username} (id={user.id})")
    return SignupResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoginResponse:
    """Exchange email and password for a bearer token."""
    user = await get_user_by_email(db, data.email, with_channels=True)

    # verify_password burns a dummy hash when the user is missing
    if not verify_password(data.password, user.password_hash if user else None) or not user:
        metrics.auth_events_total.inc(event="login", outcome="failure")
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    metrics.auth_events_total.inc(event="login", outcome="success")
    logger.info(f"User logged in: {user.username} (id={user.id})")

    return LoginResponse(
        message="Login successful",
        token=create_access_token(user.id),
        user=LoginUser(
            user_id=user.id,
            username=user.username,
            email=user.email,
            avatar=user.avatar,
            channels=[channel.id for channel in user.channels],
        ),
    )


@router.get("/me", response_model=MeResponse)
async def me(
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MeResponse:
    """Current user's profile with owned channels."""
    profile = await get_user(db, user.id, with_channels=True)
    return MeResponse(user=UserProfile.model_validate(profile))
