"""
FastAPI dependencies for request authentication.
Client endpoints take a bearer JWT issued by the session service;
the processor callback takes a shared secret header.
"""
import hmac
import jwt
from fastapi import Header
from typing import Optional
from landhud_api.core import config
from landhud_api.core.exceptions import AuthenticationError


def verify_token(authorization: Optional[str] = Header(None)) -> str:
    """
    Verify JWT token from Authorization header.

    Args:
        authorization: Authorization header value (Bearer <token>)

    Returns:
        Username from token

    Raises:
        AuthenticationError: If token is missing, invalid, or expired
    """
    if not authorization:
        raise AuthenticationError("Missing authorization header")

    if not authorization.startswith('Bearer '):
        raise AuthenticationError("Invalid authorization header format")

    token = authorization[7:]

    try:
        payload = jwt.decode(
            token,
            config.settings.jwt_secret,
            algorithms=[config.settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    username = payload.get('sub')
    if not username:
        raise AuthenticationError("Invalid token payload")

    return username


def verify_callback_secret(x_webhook_secret: Optional[str] = Header(None)) -> None:
    """
    Check the shared secret sent by the external processor.

    The check is skipped when LEAD_LIST_CALLBACK_SECRET is not configured.

    Raises:
        AuthenticationError: If a secret is configured and the header does not match
    """
    expected = config.settings.lead_list_callback_secret
    if not expected:
        return

    if not x_webhook_secret or not hmac.compare_digest(x_webhook_secret, expected):
        raise AuthenticationError("Invalid webhook secret")
