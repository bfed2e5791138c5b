"""
@file: auth.py
@description:
This module implements authentication endpoints for the NerdyTips API.

Routes:
- POST /api/auth/register: Create an account and return a session token
- POST /api/auth/login: Authenticate a user and return a session token
- GET /api/auth/me: Public profile of the authenticated user

@dependencies:
- fastapi: For API routing
- nerdytips.services.credential_service: Registration, login and verification
- nerdytips.schemas.auth: For request/response validation

@notes:
- Duplicate emails and bad credentials are both reported as 400 with an
  {"error": ...} body by the application's exception handler
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nerdytips.api.deps import get_app_settings, get_current_identity
from nerdytips.core.auth import TokenIdentity
from nerdytips.core.config import Settings
from nerdytips.db.session import get_db
from nerdytips.schemas.auth import AuthResponse, Credentials, UserOut
from nerdytips.services import credential_service

# Create a router instance
router = APIRouter()


@router.post("/register", response_model=AuthResponse, tags=["Authentication"])
def register_user(
    credentials: Credentials,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> AuthResponse:
    """
    Register a new user with the free tier and the default prediction quota.

    Returns:
        AuthResponse: Session token and the public user profile
    """
    return credential_service.register(db, credentials.email, credentials.password, settings=settings)


@router.post("/login", response_model=AuthResponse, tags=["Authentication"])
def login_for_access_token(
    credentials: Credentials,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> AuthResponse:
    """
    Authenticate a user and return a fresh session token.
    """
    return credential_service.login(db, credentials.email, credentials.password, settings=settings)


@router.get("/me", response_model=UserOut, tags=["Authentication"])
def read_current_user(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
) -> UserOut:
    return credential_service.current_user(db, identity)
