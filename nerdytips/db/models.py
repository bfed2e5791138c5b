"""
@file: models.py
@description:
This file defines SQLAlchemy ORM models for the NerdyTips backend: the User
table holding credentials and subscription state, and the Prediction table
holding AI-generated football tips.

@notes:
- String primary keys; ids are generated in Python (uuid4 hex) except for
  the fixed demonstration rows, which use "1".."4".
- No foreign keys and no indexes beyond primary/unique keys.
- created_at is stamped in Python with microsecond precision so that rows
  inserted within the same second still order newest-first.
- Timestamps are stored as naive UTC and always read back as aware UTC
  (SQLite keeps no offset). Naive values written in are taken to be UTC.

@dependencies:
- SQLAlchemy: for defining ORM models.
- nerdytips.db.base: provides the Base class (declarative_base).
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from nerdytips.db.base import Base


def generate_id() -> str:
    """Opaque identifier for new rows."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """DateTime column that round-trips timezone-aware UTC values."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Tier(str, enum.Enum):
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ELITE = "elite"


class PredictionStatus(str, enum.Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    VOID = "void"


DEFAULT_PREDICTIONS_QUOTA = 4


class User(Base):
    """
    @class User
    @description
    A registered account. The password column only ever holds a bcrypt hash.

    @attributes:
        id (String): Primary key.
        email (String): Unique login key.
        password (String): Salted password hash.
        tier (String): Subscription tier, defaults to "free".
        predictions_remaining (Integer): Prediction quota, defaults to 4.
        subscription_end (DateTime): End of the paid subscription; null for free tier.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_id)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    tier = Column(String, nullable=False, default=Tier.FREE.value)
    predictions_remaining = Column(Integer, nullable=False, default=DEFAULT_PREDICTIONS_QUOTA)
    subscription_end = Column(UTCDateTime(), nullable=True)


class Prediction(Base):
    """
    @class Prediction
    @description
    SQLAlchemy model representing a football match tip, either one of the
    demonstration rows or one produced by the AI generator.

    @attributes:
        id (String): Primary key.
        home_team, away_team, league (String): The fixture.
        start_time (DateTime): Kick-off time.
        prediction (String): Outcome label, e.g. "Home Win" or "Over 2.5".
        odds (Float): Decimal payout multiple.
        confidence (Float): Confidence score from 0 to 100.
        analysis (Text): Rationale for the pick.
        status (String): pending, won, lost or void; defaults to pending.
        is_elite (Boolean): Premium-tier visibility flag.
        created_at (DateTime): Insertion time.
    """
    __tablename__ = "predictions"

    id = Column(String, primary_key=True, default=generate_id)
    home_team = Column(String, nullable=False)
    away_team = Column(String, nullable=False)
    league = Column(String, nullable=False)
    start_time = Column(UTCDateTime(), nullable=False)
    prediction = Column(String, nullable=False)
    odds = Column(Float, nullable=False)
    confidence = Column(Float, nullable=False)
    analysis = Column(Text, nullable=False)
    status = Column(String, nullable=False, default=PredictionStatus.PENDING.value)
    is_elite = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
