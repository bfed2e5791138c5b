"""
@file: exceptions.py
@description:
Domain exceptions for the NerdyTips backend. Services raise these; a single
FastAPI exception handler (registered in nerdytips.main) renders them as an
HTTP status plus the JSON envelope {"error": "<message>"}.

@notes:
- None of these are retried by the request layer.
- InvalidCredentials deliberately carries the same message whether the email
  is unknown or the password is wrong.
"""

from typing import Optional

from fastapi import status


class NerdyTipsError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmail(NerdyTipsError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists"


class InvalidCredentials(NerdyTipsError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class Unauthorized(NerdyTipsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class GenerationFailed(NerdyTipsError):
    """The external AI service was unreachable or returned an unusable payload."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to generate prediction"


class PersistenceError(NerdyTipsError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"
