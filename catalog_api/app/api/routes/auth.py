"""
Authentication endpoints.

``POST /auth/register`` creates a user and ``POST /auth/login`` trades
an email and password for a signed access token valid for one hour by
default.
"""

import sqlite3
from typing import Optional

from fastapi import APIRouter, Depends, status

from catalog_api.app.core.config import Settings
from catalog_api.app.core.db import get_db
from catalog_api.app.core.security import get_settings
from catalog_api.app.schemas.user import LoginResponse, MessageResponse, UserLogin, UserRegister
from catalog_api.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user: Optional[UserRegister] = None,
    conn: sqlite3.Connection = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    """Register a new user.

    Returns 400 if the email is already registered or a field is missing.
    """
    await AuthService.register(conn, settings, user or UserRegister())
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: Optional[UserLogin] = None,
    conn: sqlite3.Connection = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Authenticate a user and return an access token.

    Unknown emails and wrong passwords are both answered with 400 but
    with different messages (``User not found`` / ``Invalid credentials``).
    """
    token = await AuthService.login(conn, settings, credentials or UserLogin())
    return LoginResponse(message="Login Success.", token=token)
