"""
LLM Package for NerdyTips Backend.

This package handles the integration with the external generative AI service
that produces match predictions.

The package provides:
- Base prediction model interface and strict payload schemas
- OpenAI-compatible implementation (Gemini by default)
- Factory function for model creation from settings
"""

from .base_model import (
    BasePredictionModel,
    DailyPickPayload,
    MatchFixture,
    PredictionPayload
)
from .prediction_model import OpenAICompatiblePredictionModel, create_prediction_model

__all__ = [
    "BasePredictionModel",
    "DailyPickPayload",
    "MatchFixture",
    "PredictionPayload",
    "OpenAICompatiblePredictionModel",
    "create_prediction_model"
]
