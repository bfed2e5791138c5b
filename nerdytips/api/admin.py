"""
@file: admin.py
@description:
Administrative endpoints. Every route requires a valid session token.

Routes:
- POST /api/admin/seed-predictions: restore the three fixed demonstration predictions
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nerdytips.api.deps import get_current_identity
from nerdytips.core.auth import TokenIdentity
from nerdytips.core.logger import setup_logger
from nerdytips.db.session import get_db
from nerdytips.schemas.auth import MessageResponse
from nerdytips.services import prediction_service

logger = setup_logger("nerdytips.api.admin")

router = APIRouter()


@router.post("/seed-predictions", response_model=MessageResponse, tags=["Admin"])
def seed_predictions(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
) -> MessageResponse:
    """
    Upsert the demonstration predictions "1" to "3". Existing rows with those
    ids are overwritten; other predictions are left alone.
    """
    count = prediction_service.seed_predictions(db, prediction_service.ADMIN_SEED_PREDICTIONS)
    logger.info(f"User {identity.id} reseeded {count} predictions")
    return MessageResponse(message="Predictions seeded")
