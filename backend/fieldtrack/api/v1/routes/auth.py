"""
Auth Routes

Signup, login and current-user endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fieldtrack.api.deps import get_current_user
from fieldtrack.db.session import get_async_db
from fieldtrack.features.users import (
    LoginRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    User,
    UserRepository,
    UserResponse,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(request: SignupRequest, db: AsyncSession = Depends(get_async_db)):
    """
    Create a user account.

    Email is stored lower-cased; phone and email must both be unused.
    """
    user_repo = UserRepository(db)

    existing = await user_repo.find_by_phone_or_email(request.phone, request.email)
    if existing:
        raise HTTPException(
            status_code=400,
            detail="User with this email or phone already exists"
        )

    await user_repo.create(
        name=request.name,
        phone=request.phone,
        email=request.email,
        password_hash=hash_password(request.password),
        role=request.role.value,
    )
    await db.commit()

    logger.info(f"User signed up: {request.email} ({request.role.value})")
    return SignupResponse(message="Signup successful")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_async_db)):
    """Exchange email + password for a bearer token."""
    if not request.email or not request.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = await UserRepository(db).get_by_email(request.email)

    # Same message for unknown email and wrong password
    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return TokenResponse(
        token=create_access_token(user.id, user.role),
        role=user.role,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return UserResponse.model_validate(user)
