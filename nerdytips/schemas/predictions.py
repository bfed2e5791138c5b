"""
@file: predictions.py
@description:
Pydantic schemas for request validation and response serialization
of football match predictions.

Schemas:
- PredictionOut: A single prediction as exposed by the API
- GeneratePredictionRequest: Fixture to analyse, as posted by the client
- BetSlipOut: An accumulator of AI-picked predictions

@notes:
- Field names are snake_case in Python and camelCase on the wire
  (homeTeam, isElite, createdAt, ...), matching what the client renders.
- Responses are built from ORM rows with PredictionOut.from_row.

@dependencies:
- pydantic: for data validation and serialization
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nerdytips.db.models import Prediction, PredictionStatus


class CamelModel(BaseModel):
    """Base for schemas that speak camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PredictionOut(CamelModel):
    """
    Fields returned by the API for a single prediction record.
    """
    id: str
    home_team: str
    away_team: str
    league: str
    start_time: datetime
    prediction: str = Field(..., description="Outcome label, e.g. 'Home Win' or 'Over 2.5'.")
    odds: float = Field(..., gt=0, description="Decimal payout multiple.")
    confidence: float = Field(..., ge=0, le=100, description="Confidence score from 0 to 100.")
    analysis: str
    status: PredictionStatus = PredictionStatus.PENDING
    is_elite: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Prediction) -> "PredictionOut":
        return cls(
            id=row.id,
            home_team=row.home_team,
            away_team=row.away_team,
            league=row.league,
            start_time=row.start_time,
            prediction=row.prediction,
            odds=row.odds,
            confidence=row.confidence,
            analysis=row.analysis,
            status=row.status,
            is_elite=bool(row.is_elite),
            created_at=row.created_at,
        )


class GeneratePredictionRequest(BaseModel):
    """
    Body of POST /api/predictions/generate.
    """
    home: str = Field(..., min_length=1, description="Home team name.")
    away: str = Field(..., min_length=1, description="Away team name.")
    league: str = Field(..., min_length=1, description="Competition name.")


class BetSlipOut(CamelModel):
    """
    An accumulator of predictions. total_odds is the product of the
    individual odds; confidence is their mean.
    """
    id: str
    matches: List[PredictionOut]
    total_odds: float
    confidence: float
    date: datetime
