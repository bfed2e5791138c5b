"""
@file: base_model.py
@description:
Defines the abstract base class interface for the AI models that produce
NerdyTips predictions, together with the payload schemas those models must
return. The generator service only talks to this interface, so the concrete
completion provider can be swapped (or faked in tests).

@dependencies:
- abc: For abstract base class functionality
- pydantic: For strict payload validation

@notes:
- Payload schemas are strict: a missing field, a string where a number is
  expected, or an out-of-range value is a validation error, never coerced.
- Unknown extra keys in a payload are ignored.
- Implementations raise GenerationFailed for every failure mode.
"""

from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class MatchFixture(BaseModel):
    """A fixture to analyse."""
    home_team: str
    away_team: str
    league: str


class PredictionPayload(BaseModel):
    """Structured prediction returned by the AI service for a single fixture."""
    model_config = ConfigDict(strict=True, extra="ignore")

    prediction: str = Field(..., min_length=1)
    odds: float = Field(..., gt=0)
    confidence: float = Field(..., ge=0, le=100)
    analysis: str
    isElite: bool


class DailyPickPayload(PredictionPayload):
    """A prediction that also names its own fixture, used for daily bet slips."""
    homeTeam: str = Field(..., min_length=1)
    awayTeam: str = Field(..., min_length=1)
    league: str = Field(..., min_length=1)


class DailyPicksPayload(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    predictions: List[DailyPickPayload]


class BasePredictionModel(ABC):
    """
    Abstract base class that defines the interface for all prediction models.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Identifier of the underlying model, recorded in logs."""

    @abstractmethod
    async def predict(self, fixture: MatchFixture) -> PredictionPayload:
        """
        Generate a prediction for one fixture.

        Raises:
            GenerationFailed: If the service is unreachable or the payload is invalid
        """

    @abstractmethod
    async def daily_picks(self, limit: int = 3) -> List[DailyPickPayload]:
        """
        Pick the `limit` highest-confidence fixtures of the day.

        Raises:
            GenerationFailed: If the service is unreachable or the payload is invalid
        """
