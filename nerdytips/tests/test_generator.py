"""
@file: test_generator.py
@description:
Service-level tests for turning model output into stored predictions and bet slips.
"""

from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest
from fastapi.concurrency import run_in_threadpool

from nerdytips.core.exceptions import GenerationFailed
from nerdytips.schemas.predictions import PredictionOut
from nerdytips.services import prediction_generator, prediction_service
from nerdytips.services.prediction_generator import (
    generate_daily_slip,
    generate_prediction,
    summarize_slip
)


def _out(odds, confidence):
    return PredictionOut(
        id=f"p-{odds}",
        home_team="Home",
        away_team="Away",
        league="League",
        start_time=datetime(2026, 3, 1, 15, 0, tzinfo=timezone.utc),
        prediction="Home Win",
        odds=odds,
        confidence=confidence,
        analysis="",
        status="pending",
        is_elite=False,
        created_at=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.mark.asyncio
async def test_generated_prediction_matches_fixture_and_is_stored(db_session, fake_model):
    before = datetime.now(timezone.utc)

    result = await generate_prediction(db_session, fake_model, "Chelsea", "Arsenal", "Premier League")

    assert result.home_team == "Chelsea"
    assert result.away_team == "Arsenal"
    assert result.league == "Premier League"
    assert result.status == "pending"
    assert 0 <= result.confidence <= 100
    assert result.odds > 0

    assert result.start_time.utcoffset() == timedelta(0)
    assert result.created_at.utcoffset() == timedelta(0)
    assert result.start_time >= before

    stored = prediction_service.list_all(db_session)
    assert [p.id for p in stored] == [result.id]


@pytest.mark.asyncio
async def test_each_generation_gets_a_new_id(db_session, fake_model):
    first = await generate_prediction(db_session, fake_model, "Chelsea", "Arsenal", "Premier League")
    second = await generate_prediction(db_session, fake_model, "Chelsea", "Arsenal", "Premier League")

    assert first.id != second.id
    assert prediction_service.count_predictions(db_session) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [GenerationFailed(), ValueError("bad json"), TimeoutError()])
async def test_failed_generation_stores_nothing(db_session, fake_model, error):
    prediction_service.seed_predictions(db_session)
    fake_model.error = error

    with pytest.raises(GenerationFailed):
        await generate_prediction(db_session, fake_model, "Chelsea", "Arsenal", "Premier League")

    assert prediction_service.count_predictions(db_session) == 4


def test_summarize_slip():
    slip = summarize_slip([_out(1.5, 88), _out(2.0, 70), _out(1.25, 61)])

    assert slip.total_odds == 3.75
    assert slip.confidence == 73.0
    assert len(slip.matches) == 3


def test_summarize_empty_slip():
    slip = summarize_slip([])
    assert slip.total_odds == 0.0
    assert slip.confidence == 0.0


@pytest.mark.asyncio
async def test_daily_slip_stores_every_pick(db_session, fake_model):
    slip = await generate_daily_slip(db_session, fake_model)

    assert len(slip.matches) == 3
    assert prediction_service.count_predictions(db_session) == 3
    assert [p.home_team for p in prediction_service.list_elite(db_session)] == ["Inter"]


@pytest.mark.asyncio
async def test_daily_slip_failure_stores_nothing(db_session, fake_model):
    fake_model.error = RuntimeError("upstream closed the connection")

    with pytest.raises(GenerationFailed) as excinfo:
        await generate_daily_slip(db_session, fake_model)

    assert excinfo.value.message == "Failed to generate bet slip"
    assert prediction_service.count_predictions(db_session) == 0


@pytest.mark.asyncio
async def test_generation_writes_in_threadpool(db_session, fake_model):
    with mock.patch.object(prediction_generator, "run_in_threadpool", wraps=run_in_threadpool) as pool:
        await generate_prediction(db_session, fake_model, "Chelsea", "Arsenal", "Premier League")
        await generate_daily_slip(db_session, fake_model)

    assert [c.args[0] for c in pool.call_args_list] == [
        prediction_service.upsert_prediction,
        prediction_service.upsert_many,
    ]
    assert prediction_service.count_predictions(db_session) == 4
