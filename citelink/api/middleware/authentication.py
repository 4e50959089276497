"""Bearer-token authentication for the citation API

The API key is resolved once when the application is built and bound
into a verifier. With no key configured every citation request is
refused; there is no built-in fallback key.
"""
import logging
import os
import secrets
from typing import Awaitable, Callable, Optional

from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "CITELINK_API_KEY"

TokenVerifier = Callable[[HTTPAuthorizationCredentials], Awaitable[str]]


def resolve_api_key(environ=None) -> Optional[str]:
    """Read the service API key.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        The configured key, or None when unset or blank
    """
    environ = os.environ if environ is None else environ
    api_key = (environ.get(API_KEY_ENV_VAR) or "").strip()
    if not api_key:
        logger.warning(f"{API_KEY_ENV_VAR} is not set, citation endpoints will refuse all requests")
        return None
    return api_key


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_token_verifier(api_key: Optional[str]) -> TokenVerifier:
    """Build the token check for one application instance.

    Args:
        api_key: Expected bearer token, or None when not configured

    Returns:
        Async callable returning the verified token

    Raises:
        HTTPException: 401 from the returned callable when the token is
            wrong or no key is configured
    """

    async def verify_token(credentials: HTTPAuthorizationCredentials) -> str:
        if not api_key:
            raise _unauthorized("API key not configured")
        if not secrets.compare_digest(credentials.credentials, api_key):
            raise _unauthorized("Invalid authentication credentials")
        return credentials.credentials

    return verify_token
