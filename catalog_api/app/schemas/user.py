"""
Pydantic models for registration and login.

The password travels in a field named ``pass``, which is a Python
keyword, so the models expose it as ``password`` with ``pass`` as the
alias.  Field values are left untyped; ``AuthService`` checks them and
reports a single message for the whole payload.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """Body of ``POST /auth/register``."""

    model_config = ConfigDict(populate_by_name=True)

    name: Any = Field(None, examples=["John Doe"])
    email: Any = Field(None, examples=["johndoe@example.com"])
    password: Any = Field(None, alias="pass", examples=["password123"])


class UserLogin(BaseModel):
    """Body of ``POST /auth/login``."""

    model_config = ConfigDict(populate_by_name=True)

    email: Any = Field(None, examples=["johndoe@example.com"])
    password: Any = Field(None, alias="pass", examples=["password123"])


class UserRecord(BaseModel):
    """A stored user, without the password hash."""

    id: int
    name: str
    email: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str
