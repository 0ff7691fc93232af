"""Auth API — sign-up, sign-in, current user.

- POST /auth/signup → create a USER account, returns a token
- POST /auth/signin → username/password → JWT access token
- GET  /auth/me     → current user info

Admins are provisioned from the CLI (`tienda create-admin`), never
through the public sign-up route.
"""

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.auth import ROLE_USER
from tienda.auth.dependencies import CurrentIdentity, get_current_user
from tienda.auth.jwt import create_access_token
from tienda.auth.password import hash_password, verify_password
from tienda.db.engine import get_db
from tienda.db.models import User
from tienda.schemas.client import EMAIL_PATTERN

logger = structlog.get_logger()
router = APIRouter(prefix="/auth")


# ─── Schemas ─────────────────────────────────────────────


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=5)
    password_confirm: str = Field(..., min_length=5)


class SignInRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    id: int
    name: str
    last_name: str
    username: str
    email: str
    roles: list[str]
    is_deleted: bool
    created_at: datetime

    model_config = {"from_attributes": True}


# ─── Sign-up ─────────────────────────────────────────────


@router.post("/signup", response_model=TokenResponse)
async def signup(body: SignUpRequest, db: AsyncSession = Depends(get_db)):
    """Create a new USER account and sign it in."""
    if body.password != body.password_confirm:
        raise HTTPException(status_code=400, detail="Passwords do not match")

    q = select(User.id).where(
        or_(User.username == body.username, User.email == body.email)
    )
    if (await db.execute(q)).first() is not None:
        raise HTTPException(status_code=409, detail="Username or email already registered")

    user = User(
        name=body.name,
        last_name=body.last_name,
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        roles=[ROLE_USER],
    )
    db.add(user)
    await db.commit()
    logger.info("user.signed_up", user_id=user.id, username=user.username)
    return TokenResponse(
        access_token=create_access_token(user.id, user.username, user.roles)
    )


# ─── Sign-in ─────────────────────────────────────────────


@router.post("/signin", response_model=TokenResponse)
async def signin(body: SignInRequest, db: AsyncSession = Depends(get_db)):
    """Sign in with username and password → JWT access token."""
    q = select(User).where(User.username == body.username)
    user = (await db.execute(q)).scalars().first()

    if not user or user.is_deleted or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return TokenResponse(
        access_token=create_access_token(user.id, user.username, user.roles)
    )


# ─── Me ──────────────────────────────────────────────────


@router.get("/me", response_model=UserResponse)
async def me(
    identity: CurrentIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await db.get(User, identity.user_id) if identity.user_id is not None else None
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
