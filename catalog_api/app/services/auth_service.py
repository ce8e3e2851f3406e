"""
Business logic for user registration and login.

Passwords are never stored in plain text: ``register`` stores a
PBKDF2 hash and ``login`` compares against it.  Both hashing and
verification are CPU bound, so they run in Starlette's thread pool to
keep the event loop free for other requests.

Email uniqueness is enforced by the ``UNIQUE`` constraint on
``users.email``; a duplicate registration surfaces as
``ConflictError("Email already registered")``.
"""

import logging
import sqlite3

from starlette.concurrency import run_in_threadpool

from catalog_api.app.core.config import Settings
from catalog_api.app.core.db import is_unique_violation
from catalog_api.app.core.errors import ConflictError, CredentialsError, InternalError, ValidationError
from catalog_api.app.core.security import create_access_token, hash_password, verify_password
from catalog_api.app.schemas.user import UserLogin, UserRecord, UserRegister
from catalog_api.app.services.validation import is_non_empty_string

logger = logging.getLogger(__name__)


class AuthService:
    """Registration and token issuance."""

    @classmethod
    async def register(cls, conn: sqlite3.Connection, settings: Settings, data: UserRegister) -> UserRecord:
        """Create a user with a hashed password.

        Raises ``ValidationError`` if a field is missing or empty and
        ``ConflictError`` if the email is already registered.
        """
        if not all(is_non_empty_string(v) for v in (data.name, data.email, data.password)):
            raise ValidationError("Name, email and password are required.")
        try:
            hashed = await run_in_threadpool(hash_password, data.password, settings.password_hash_iterations)
        except ValueError as exc:
            logger.exception("Password hashing failed")
            raise InternalError() from exc

        try:
            cursor = conn.execute(
                "INSERT INTO users (name, email, pass) VALUES (?, ?, ?)",
                (data.name, data.email, hashed),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if is_unique_violation(exc):
                raise ConflictError("Email already registered") from exc
            raise
        logger.info("Registered user %s", cursor.lastrowid)
        return UserRecord(id=cursor.lastrowid, name=data.name, email=data.email)

    @classmethod
    async def login(cls, conn: sqlite3.Connection, settings: Settings, data: UserLogin) -> str:
        """Check the credentials and return a signed access token.

        The token carries the user id and expires after
        ``settings.access_token_expire_minutes``.
        """
        if not (is_non_empty_string(data.email) and is_non_empty_string(data.password)):
            raise ValidationError("Email and password are required.")
        row = conn.execute("SELECT id, pass FROM users WHERE email = ?", (data.email,)).fetchone()
        if not row:
            raise CredentialsError("User not found")
        if not await run_in_threadpool(verify_password, data.password, row["pass"]):
            logger.info("Rejected login for user %s", row["id"])
            raise CredentialsError("Invalid credentials")
        return create_access_token(
            {"sub": str(row["id"]), "id": row["id"]},
            settings.secret_key,
            settings.access_token_expire_minutes * 60,
            settings.algorithm,
        )
