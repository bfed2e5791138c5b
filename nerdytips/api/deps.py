"""
@file: deps.py
@description:
FastAPI dependencies shared by the routers: the settings the application was
built with, the authenticated identity of the caller, and the AI prediction model.

@notes:
- The prediction model is created on first use and cached on app.state, so a
  missing API key only fails the generation routes, not application startup.
"""

from typing import Optional

from fastapi import Depends, Request

from nerdytips.core.auth import TokenIdentity, oauth2_scheme
from nerdytips.core.config import Settings
from nerdytips.llm.base_model import BasePredictionModel
from nerdytips.llm.prediction_model import create_prediction_model
from nerdytips.services import credential_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_identity(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings)
) -> TokenIdentity:
    """
    Resolve the bearer token into the caller's identity.

    Raises:
        Unauthorized: If the token is missing or fails verification.
    """
    return credential_service.verify(token, settings=settings)


def get_prediction_model(request: Request) -> BasePredictionModel:
    state = request.app.state
    if getattr(state, "prediction_model", None) is None:
        state.prediction_model = create_prediction_model(state.settings)
    return state.prediction_model
