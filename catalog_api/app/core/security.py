"""
Security helpers for password hashing and token authentication.

Passwords are hashed with PBKDF2‑HMAC‑SHA256 using a random 16‑byte
salt.  The stored string records the iteration count next to the salt
and digest (``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``) so
that raising the work factor later does not invalidate existing
hashes.

Session tokens use the JSON Web Token layout: base64url encoded header,
payload and HMAC signature joined by dots.  The payload carries the
user id and an ``exp`` timestamp; the token is self‑contained and
nothing is stored server side.

``require_auth`` is the dependency placed in front of mutating routes.
It only enforces a token when ``Settings.auth_required`` is enabled.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .errors import AuthenticationError

HASH_SCHEME = "pbkdf2_sha256"
SALT_BYTES = 16

_DIGESTS = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str, algorithm: str) -> bytes:
    try:
        digest = _DIGESTS[algorithm]
    except KeyError:
        raise ValueError(f"Unsupported token algorithm: {algorithm}") from None
    return hmac.new(secret.encode("utf-8"), message, digest).digest()


def create_access_token(
    data: Dict[str, Any],
    secret_key: str,
    expires_delta: int,
    algorithm: str = "HS256",
) -> str:
    """Create a signed token with the given claims.

    The claims are extended with an ``exp`` field holding the expiry as
    a UNIX timestamp, ``expires_delta`` seconds from now.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"id": 7}``).
    secret_key : str
        HMAC secret used to sign the token.
    expires_delta : int
        Lifetime of the token in seconds.
    algorithm : str
        One of ``HS256``, ``HS384`` or ``HS512``.

    Returns
    -------
    str
        The token, ``header.payload.signature``.
    """
    to_encode = dict(data)
    to_encode["exp"] = int(time.time()) + expires_delta
    header = {"alg": algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret_key, algorithm))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> Optional[Dict[str, Any]]:
    """Verify a token and return its claims.

    Returns ``None`` when the token is malformed, was signed with a
    different secret or algorithm, or has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    try:
        header = json.loads(_b64_url_decode(header_b64))
        if not isinstance(header, dict) or header.get("alg") != algorithm:
            return None
        expected_sig = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"), secret_key, algorithm)
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and json.JSONDecodeError are both ValueErrors
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        return None
    return data


def hash_password(password: str, iterations: int) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A fresh random salt is generated for every call, so hashing the
    same password twice gives two different strings.
    """
    if iterations < 1:
        raise ValueError("iterations must be a positive integer")
    salt = os.urandom(SALT_BYTES)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{HASH_SCHEME}${iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash string.

    The digest is recomputed with the salt and iteration count stored
    in ``hashed_password`` and compared in constant time.  Malformed
    hash strings never verify.
    """
    try:
        scheme, iterations, salt_hex, hash_hex = hashed_password.split("$")
        if scheme != HASH_SCHEME:
            return False
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, int(iterations))
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(dk, stored_hash)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Decode the bearer token of the request and return its claims.

    Raises ``AuthenticationError`` (401) if the header is missing or the
    token does not verify.
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    payload = decode_access_token(credentials.credentials, settings.secret_key, settings.algorithm)
    if not payload or "id" not in payload:
        raise AuthenticationError("Invalid or expired token")
    return payload


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Optional[Dict[str, Any]]:
    """Guard for mutating routes.

    Returns ``None`` without looking at the request when
    ``settings.auth_required`` is off; otherwise behaves like
    ``get_current_user``.
    """
    if not settings.auth_required:
        return None
    return get_current_user(credentials, settings)
