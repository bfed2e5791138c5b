"""
@file: predictions.py
@description:
Provides API endpoints to retrieve and generate football predictions.

Routes:
- GET /api/predictions : all predictions, newest first (seeds demo rows if empty)
- GET /api/predictions/elites : elite predictions only
- POST /api/predictions/generate : AI prediction for a fixture (auth required)
- POST /api/predictions/daily-slip : AI bet slip of the day's top picks (auth required)

@dependencies:
- FastAPI APIRouter for route definitions.
- prediction_service for reads and seeding.
- prediction_generator for AI-backed creation.
- nerdytips.api.deps for authentication and the prediction model.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nerdytips.api.deps import get_current_identity, get_prediction_model
from nerdytips.core.auth import TokenIdentity
from nerdytips.core.logger import setup_logger
from nerdytips.db.session import get_db
from nerdytips.llm.base_model import BasePredictionModel
from nerdytips.schemas.predictions import BetSlipOut, GeneratePredictionRequest, PredictionOut
from nerdytips.services import prediction_generator, prediction_service

logger = setup_logger("nerdytips.api.predictions")

router = APIRouter()


@router.get("", response_model=List[PredictionOut], tags=["Predictions"])
def get_predictions(db: Session = Depends(get_db)) -> List[PredictionOut]:
    """
    GET /api/predictions

    Returns every prediction, most recent first. When the store is empty the
    four demonstration predictions are seeded before reading.
    """
    if prediction_service.seed_if_empty(db):
        logger.info("Predictions table was empty; demonstration rows seeded")
    return [PredictionOut.from_row(row) for row in prediction_service.list_all(db)]


@router.get("/elites", response_model=List[PredictionOut], tags=["Predictions"])
def get_elite_predictions(db: Session = Depends(get_db)) -> List[PredictionOut]:
    """
    GET /api/predictions/elites
    """
    return [PredictionOut.from_row(row) for row in prediction_service.list_elite(db)]


@router.post("/generate", response_model=PredictionOut, tags=["Predictions"])
async def generate_prediction(
    fixture: GeneratePredictionRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    model: BasePredictionModel = Depends(get_prediction_model)
) -> PredictionOut:
    """
    POST /api/predictions/generate

    Example Request Body:
    {"home": "Chelsea", "away": "Arsenal", "league": "Premier League"}

    Raises:
        Unauthorized (401): Missing or invalid token.
        GenerationFailed (500): The AI service failed or returned an invalid payload.
    """
    logger.info(f"User {identity.id} requested a prediction for {fixture.home} vs {fixture.away}")
    return await prediction_generator.generate_prediction(
        db, model, fixture.home, fixture.away, fixture.league
    )


@router.post("/daily-slip", response_model=BetSlipOut, tags=["Predictions"])
async def generate_daily_slip(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    model: BasePredictionModel = Depends(get_prediction_model)
) -> BetSlipOut:
    """
    POST /api/predictions/daily-slip

    Builds an accumulator from the AI's highest-confidence picks of the day.
    """
    logger.info(f"User {identity.id} requested the daily bet slip")
    return await prediction_generator.generate_daily_slip(db, model)
