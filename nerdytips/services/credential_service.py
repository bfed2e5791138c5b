"""
@file: credential_service.py
@description
Registration, login and session verification for NerdyTips users.

- register: one insert, fails with DuplicateEmail when the email is taken
- login: one read, fails with InvalidCredentials for an unknown email or a
  wrong password (same message either way)
- verify: pure token check, no database access
- current_user: resolves a verified identity to the stored public projection

@dependencies
- sqlalchemy: For reading and writing the users table.
- nerdytips.core.auth: Password hashing and JWT helpers.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from nerdytips.core.auth import (
    TokenIdentity,
    create_session_token,
    get_password_hash,
    verify_access_token,
    verify_password
)
from nerdytips.core.config import Settings
from nerdytips.core.exceptions import (
    DuplicateEmail,
    InvalidCredentials,
    PersistenceError,
    Unauthorized
)
from nerdytips.core.logger import setup_logger
from nerdytips.db.models import User, generate_id
from nerdytips.schemas.auth import AuthResponse, UserOut

logger = setup_logger("nerdytips.services.credential_service")


def _find_by_email(db: Session, email: str) -> Optional[User]:
    try:
        return db.scalar(select(User).where(User.email == email))
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to look up user: {str(e)}")


def register(db: Session, email: str, password: str, settings: Optional[Settings] = None) -> AuthResponse:
    """
    Create a user with the default tier and quota and return a session for it.

    Raises:
        DuplicateEmail: If a user with this email already exists.
        PersistenceError: If the insert fails for any other reason.
    """
    user = User(id=generate_id(), email=email, password=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Registration rejected, email already exists: {email}")
        raise DuplicateEmail()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to create user: {str(e)}")

    db.refresh(user)
    logger.info(f"New user registered: {user.id}")
    return AuthResponse(
        token=create_session_token(user.id, user.email, settings=settings),
        user=UserOut.from_row(user)
    )


def login(db: Session, email: str, password: str, settings: Optional[Settings] = None) -> AuthResponse:
    """
    Check the credentials and return a fresh session.

    Raises:
        InvalidCredentials: If the email is unknown or the password does not match.
    """
    user = _find_by_email(db, email)
    if user is None or not verify_password(password, user.password):
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentials()

    logger.info(f"User {user.id} logged in successfully")
    return AuthResponse(
        token=create_session_token(user.id, user.email, settings=settings),
        user=UserOut.from_row(user)
    )


def verify(token: Optional[str], settings: Optional[Settings] = None) -> TokenIdentity:
    """Validate a session token; raises Unauthorized on any failure."""
    return verify_access_token(token, settings=settings)


def current_user(db: Session, identity: TokenIdentity) -> UserOut:
    """
    Load the public projection of the user a token was issued to.

    Raises:
        Unauthorized: If that user no longer exists.
    """
    try:
        user = db.get(User, identity.id)
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to load user: {str(e)}")
    if user is None:
        raise Unauthorized()
    return UserOut.from_row(user)
