"""
@file: prediction_service.py
@description
This module provides service-level functions for storing and reading football
predictions in the relational store.

Key features:
- Reads: all predictions or elite-only, newest first. Reads never write.
- Upsert: a single INSERT ... ON CONFLICT(id) DO UPDATE per row, so
  concurrent writers of the same id overwrite instead of colliding.
- Seeding: explicit upsert of the fixed demonstration rows, plus a
  seed_if_empty helper used at startup and by the public listing route.

@dependencies
- sqlalchemy: For database interactions.
- nerdytips.db.models: Prediction ORM model.
- nerdytips.core.logger: For logging.

@notes
- Any SQLAlchemy error is rolled back and re-raised as PersistenceError; no retry.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from nerdytips.core.exceptions import PersistenceError
from nerdytips.core.logger import setup_logger
from nerdytips.db.models import Prediction, generate_id

# Initialize logger
logger = setup_logger("nerdytips.services.prediction_service")


def _demo(pid, home, away, league, start, pred, odds, conf, elite, analysis) -> Dict[str, Any]:
    return {
        "id": pid,
        "home_team": home,
        "away_team": away,
        "league": league,
        "start_time": datetime.strptime(start, "%Y-%m-%d %H:%M"),
        "prediction": pred,
        "odds": odds,
        "confidence": conf,
        "is_elite": elite,
        "analysis": analysis,
    }


DEMO_PREDICTIONS: List[Dict[str, Any]] = [
    _demo("1", "Arsenal", "Man City", "Premier League", "2026-02-23 20:00", "Home Win", 2.1, 85, True,
          "Arsenal in great form at home."),
    _demo("2", "Real Madrid", "Barcelona", "La Liga", "2026-02-24 21:00", "Over 2.5", 1.6, 92, True,
          "El Clasico usually high scoring."),
    _demo("3", "Bayern", "Dortmund", "Bundesliga", "2026-02-25 18:30", "Home Win", 1.4, 78, False,
          "Bayern dominant at Allianz Arena."),
    _demo("4", "Liverpool", "Chelsea", "Premier League", "2026-02-26 19:45", "BTTS - Yes", 1.75, 81, False,
          "Both teams have defensive issues."),
]

# The admin reseed only restores the first three fixtures
ADMIN_SEED_PREDICTIONS: List[Dict[str, Any]] = DEMO_PREDICTIONS[:3]


def list_all(db: Session) -> List[Prediction]:
    """
    Retrieve all predictions, most recently created first.

    Raises:
        PersistenceError: If the query fails.
    """
    try:
        rows = db.scalars(
            select(Prediction).order_by(Prediction.created_at.desc(), Prediction.id.desc())
        ).all()
        logger.debug(f"Retrieved {len(rows)} predictions")
        return list(rows)
    except SQLAlchemyError as e:
        logger.error(f"Failed to retrieve predictions: {str(e)}")
        raise PersistenceError(f"Failed to retrieve predictions: {str(e)}")


def list_elite(db: Session) -> List[Prediction]:
    """
    Retrieve elite predictions only, most recently created first.

    Raises:
        PersistenceError: If the query fails.
    """
    try:
        rows = db.scalars(
            select(Prediction)
            .where(Prediction.is_elite.is_(True))
            .order_by(Prediction.created_at.desc(), Prediction.id.desc())
        ).all()
        return list(rows)
    except SQLAlchemyError as e:
        logger.error(f"Failed to retrieve elite predictions: {str(e)}")
        raise PersistenceError(f"Failed to retrieve elite predictions: {str(e)}")


def count_predictions(db: Session) -> int:
    try:
        return db.scalar(select(func.count()).select_from(Prediction))
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to count predictions: {str(e)}")


def _upsert_statement(prediction: Prediction):
    """
    INSERT ... ON CONFLICT(id) DO UPDATE for one prediction. Unset columns
    fall back to their defaults, so an overwrite replaces the whole row.
    """
    values = {
        column.key: getattr(prediction, column.key)
        for column in Prediction.__table__.columns
        if getattr(prediction, column.key) is not None
    }
    stmt = sqlite_insert(Prediction).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=[Prediction.id],
        set_={
            column.key: stmt.excluded[column.key]
            for column in Prediction.__table__.columns
            if not column.primary_key
        }
    )


def _load_by_ids(db: Session, ids: List[str]) -> List[Prediction]:
    rows = db.scalars(
        select(Prediction)
        .where(Prediction.id.in_(ids))
        .execution_options(populate_existing=True)
    ).all()
    by_id = {row.id: row for row in rows}
    return [by_id[pid] for pid in ids]


def upsert_prediction(db: Session, prediction: Prediction) -> Prediction:
    """
    Insert a prediction keyed by id, overwriting any existing row with that id.

    Args:
        db: Database session.
        prediction: Transient Prediction instance.

    Returns:
        Prediction: The persisted row.

    Raises:
        PersistenceError: If the write fails.
    """
    return upsert_many(db, [prediction])[0]


def upsert_many(db: Session, predictions: Iterable[Prediction]) -> List[Prediction]:
    """
    Upsert several predictions in one transaction; either all are written or none.
    """
    predictions = list(predictions)
    for prediction in predictions:
        if prediction.id is None:
            prediction.id = generate_id()
    try:
        for prediction in predictions:
            db.execute(_upsert_statement(prediction))
        db.commit()
        stored = _load_by_ids(db, [p.id for p in predictions])
        logger.debug(f"Upserted {len(stored)} predictions")
        return stored
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save predictions: {str(e)}")
        raise PersistenceError(f"Failed to save predictions: {str(e)}")


def seed_predictions(db: Session, rows: Iterable[Dict[str, Any]] = DEMO_PREDICTIONS) -> int:
    """
    Upsert the given demonstration rows. Re-running with the same ids
    overwrites rather than duplicates.

    Returns:
        int: Number of rows written.
    """
    seeded = upsert_many(db, [Prediction(**row) for row in rows])
    logger.info(f"Seeded {len(seeded)} demonstration predictions")
    return len(seeded)


def seed_if_empty(db: Session) -> bool:
    """
    Seed the four demonstration rows when the predictions table is empty.

    Returns:
        bool: True if rows were written.
    """
    if count_predictions(db) > 0:
        return False
    seed_predictions(db, DEMO_PREDICTIONS)
    return True
