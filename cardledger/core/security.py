"""Bearer-token authentication and admin capability checks."""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, Header
from jose import JWTError, jwt

from cardledger.core.config import settings
from cardledger.domain.exceptions import AuthenticationException, AuthorizationException
from cardledger.domain.interfaces import UserRepository

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "


def decode_access_token(token: str) -> str:
    """
    Verify a JWT and return its subject.

    Args:
        token: Encoded JWT without the ``Bearer`` prefix

    Returns:
        The authenticated user id

    Raises:
        AuthenticationException: If the token is invalid or has no subject
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError as e:
        logger.info("token_rejected", error=str(e))
        raise AuthenticationException("Invalid authentication") from e

    user_id = claims.get("sub")
    if not user_id:
        raise AuthenticationException("Invalid authentication")

    return user_id


async def get_current_user_id(
    authorization: Annotated[Optional[str], Header()] = None,
) -> str:
    """FastAPI dependency resolving the caller from the Authorization header."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise AuthenticationException()

    return decode_access_token(authorization[len(BEARER_PREFIX):].strip())


async def ensure_admin(user_repository: UserRepository, user_id: str) -> str:
    """Raise AuthorizationException unless the user holds the admin capability."""
    if not await user_repository.is_admin(user_id):
        logger.warning("admin_access_denied", user_id=user_id)
        raise AuthorizationException()

    return user_id
