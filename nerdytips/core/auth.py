"""
@file: auth.py
@description:
This module implements the authentication primitives for the NerdyTips API
using bearer JWT tokens. It provides functions for:
- Hashing and verifying passwords
- Creating and validating JWT tokens
- Defining the bearer token scheme used by protected routes

@dependencies:
- passlib.context: For password hashing and verification
- jose: For JWT token encoding/decoding
- datetime: For token expiration management
- fastapi.security: For the bearer scheme
- pydantic: For data validation
- nerdytips.core.config: For configuration settings
- nerdytips.core.logger: For component-specific logging

@notes:
- Passwords are hashed using the bcrypt algorithm (salted)
- Tokens carry the user id in "sub", the email, and an expiry
- Verifying a token is a pure signature/expiry check; no database access
"""

from datetime import datetime, timezone, timedelta
from typing import Optional, Dict, Any

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from nerdytips.core.config import Settings, settings as default_settings
from nerdytips.core.exceptions import Unauthorized
from nerdytips.core.logger import setup_logger

# Create a component-specific logger
logger = setup_logger("nerdytips.core.auth")

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Missing tokens are reported by verify_access_token, not by the scheme itself
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


class TokenIdentity(BaseModel):
    """Identity embedded in a session token."""
    id: str
    email: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against its hashed version.

    Args:
        plain_password: The password in plain text
        hashed_password: The hashed password to verify against

    Returns:
        bool: True if the password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        str: The hashed password
    """
    return pwd_context.hash(password)


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None
) -> str:
    """
    Create a JWT access token with the provided data and expiration.

    Args:
        data: Dictionary of data to encode in the token
        expires_delta: Optional expiration time delta, defaults to settings value
        settings: Settings holding the signing secret, defaults to the global settings

    Returns:
        str: The encoded JWT token
    """
    settings = settings or default_settings
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = settings.ACCESS_TOKEN_EXPIRE_DELTA
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )

    logger.debug(f"Created access token for user_id: {data.get('sub')}")
    return encoded_jwt


def create_session_token(user_id: str, email: str, settings: Optional[Settings] = None) -> str:
    """Issue the session token handed out on register and login."""
    return create_access_token({"sub": user_id, "email": email}, settings=settings)


def verify_access_token(token: Optional[str], settings: Optional[Settings] = None) -> TokenIdentity:
    """
    Decode a session token and return the identity it carries.

    Args:
        token: The raw bearer token, or None when the header was absent
        settings: Settings holding the signing secret, defaults to the global settings

    Returns:
        TokenIdentity: The embedded id and email

    Raises:
        Unauthorized: If the token is missing, malformed, expired, signed with
            another secret, or lacks the identity claims
    """
    settings = settings or default_settings
    if not token:
        raise Unauthorized()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
        return TokenIdentity(id=payload.get("sub"), email=payload.get("email"))
    except (JWTError, ValidationError) as e:
        logger.warning(f"Token validation failed: {str(e)}")
        raise Unauthorized("Invalid token")
