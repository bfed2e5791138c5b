"""
@file: prediction_generator.py
@description
Turns AI model output into stored predictions.

- generate_prediction: one fixture -> one stored Prediction
- generate_daily_slip: the model's top picks of the day -> stored Predictions
  wrapped in a bet slip (total odds = product, confidence = mean)

Nothing is written unless the model call and payload validation both
succeed; a daily slip is stored in a single transaction.
The blocking database write runs in the threadpool, off the event loop.

@dependencies
- nerdytips.llm: BasePredictionModel implementations.
- nerdytips.services.prediction_service: For persistence.
"""

import math
from datetime import datetime, timezone
from typing import List

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from nerdytips.core.exceptions import GenerationFailed
from nerdytips.core.logger import setup_logger
from nerdytips.db.models import Prediction, PredictionStatus, generate_id
from nerdytips.llm.base_model import BasePredictionModel, MatchFixture, PredictionPayload
from nerdytips.schemas.predictions import BetSlipOut, PredictionOut
from nerdytips.services import prediction_service

logger = setup_logger("nerdytips.services.prediction_generator")

DAILY_SLIP_SIZE = 3


def _to_row(payload: PredictionPayload, home_team: str, away_team: str, league: str,
            start_time: datetime) -> Prediction:
    return Prediction(
        id=generate_id(),
        home_team=home_team,
        away_team=away_team,
        league=league,
        start_time=start_time,
        prediction=payload.prediction,
        odds=payload.odds,
        confidence=payload.confidence,
        analysis=payload.analysis,
        status=PredictionStatus.PENDING.value,
        is_elite=payload.isElite,
    )


async def generate_prediction(
    db: Session,
    model: BasePredictionModel,
    home_team: str,
    away_team: str,
    league: str
) -> PredictionOut:
    """
    Ask the model about a fixture and store the result.

    Args:
        db: Database session.
        model: Prediction model to consult.
        home_team, away_team, league: The fixture.

    Returns:
        PredictionOut: The stored prediction, status pending, start time now.

    Raises:
        GenerationFailed: If the model call fails or returns an invalid payload.
        PersistenceError: If the insert fails.
    """
    fixture = MatchFixture(home_team=home_team, away_team=away_team, league=league)
    try:
        payload = await model.predict(fixture)
    except GenerationFailed:
        raise
    except Exception as e:
        logger.error(f"Prediction model {model.model_name} failed: {str(e)}")
        raise GenerationFailed() from e

    row = _to_row(payload, home_team, away_team, league, datetime.now(timezone.utc))
    stored = await run_in_threadpool(prediction_service.upsert_prediction, db, row)
    logger.info(f"Stored generated prediction {stored.id} for {home_team} vs {away_team}")
    return PredictionOut.from_row(stored)


def summarize_slip(predictions: List[PredictionOut]) -> BetSlipOut:
    """
    Build a bet slip: accumulator odds are the product of the legs' odds.
    """
    total_odds = math.prod(p.odds for p in predictions) if predictions else 0.0
    confidence = sum(p.confidence for p in predictions) / len(predictions) if predictions else 0.0
    return BetSlipOut(
        id=generate_id(),
        matches=predictions,
        total_odds=round(total_odds, 2),
        confidence=round(confidence, 1),
        date=datetime.now(timezone.utc),
    )


async def generate_daily_slip(
    db: Session,
    model: BasePredictionModel,
    limit: int = DAILY_SLIP_SIZE
) -> BetSlipOut:
    """
    Ask the model for the day's strongest picks, store them, and return them as a slip.

    Raises:
        GenerationFailed: If the model call fails or any pick is invalid.
        PersistenceError: If the insert fails.
    """
    try:
        picks = await model.daily_picks(limit)
    except GenerationFailed:
        raise
    except Exception as e:
        logger.error(f"Prediction model {model.model_name} failed on daily slip: {str(e)}")
        raise GenerationFailed("Failed to generate bet slip") from e

    now = datetime.now(timezone.utc)
    rows = [_to_row(p, p.homeTeam, p.awayTeam, p.league, now) for p in picks]
    stored = await run_in_threadpool(prediction_service.upsert_many, db, rows)
    logger.info(f"Stored daily slip with {len(stored)} predictions")
    return summarize_slip([PredictionOut.from_row(row) for row in stored])
