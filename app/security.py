"""
Shared-secret gate for the mutating product routes.

Clients send the configured key in the ``x-api-key`` header.  A missing
header is reported as unauthenticated (401); a wrong value as
forbidden (403).
"""

import hmac
from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyHeader

from .config import settings
from .errors import InvalidCredentialError, MissingCredentialError

API_KEY_HEADER = "x-api-key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def check_api_key(supplied: Optional[str], expected: str) -> None:
    if not supplied:
        raise MissingCredentialError(f"API key is required in {API_KEY_HEADER} header")
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
        raise InvalidCredentialError("Invalid API key")


def require_api_key(api_key: Optional[str] = Security(api_key_header)) -> str:
    """FastAPI dependency guarding POST/PUT/DELETE routes."""
    check_api_key(api_key, settings.api_key)
    return api_key
