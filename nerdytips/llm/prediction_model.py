"""
@file: prediction_model.py
@description
This module implements the prediction model on top of an OpenAI-compatible
chat-completions API. By default it talks to Google Gemini through its
OpenAI-compatible endpoint, asking for JSON constrained by a response schema.

Key features:
- Prompting: one prompt per fixture, one prompt for the daily bet slip.
- Strict parsing: responses are validated against the payload schemas in
  nerdytips.llm.base_model; anything else becomes GenerationFailed.
- Bounded latency: every call has a timeout and is retried once, only on
  transient network failures (connection errors and timeouts).

@dependencies
- openai: AsyncOpenAI client pointed at the configured base URL.
- tenacity: For the bounded retry.
- nerdytips.core.logger: For logging.
"""

from typing import Any, Dict, List

import openai
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential
)

from nerdytips.core.config import Settings
from nerdytips.core.exceptions import GenerationFailed
from nerdytips.core.logger import setup_logger
from nerdytips.llm.base_model import (
    BasePredictionModel,
    DailyPickPayload,
    DailyPicksPayload,
    MatchFixture,
    PredictionPayload
)

logger = setup_logger("nerdytips.llm.prediction_model")

SYSTEM_PROMPT = "You are an expert football analyst producing betting tips. Reply with JSON only."

MAJOR_LEAGUES = ["Premier League", "La Liga", "Serie A", "Bundesliga", "Ligue 1"]

PREDICTION_PROPERTIES: Dict[str, Any] = {
    "prediction": {"type": "string"},
    "odds": {"type": "number"},
    "confidence": {"type": "number"},
    "analysis": {"type": "string"},
    "isElite": {"type": "boolean"},
}

PREDICTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": PREDICTION_PROPERTIES,
    "required": list(PREDICTION_PROPERTIES),
}

DAILY_PICK_PROPERTIES: Dict[str, Any] = {
    "homeTeam": {"type": "string"},
    "awayTeam": {"type": "string"},
    "league": {"type": "string"},
    **PREDICTION_PROPERTIES,
}

DAILY_PICKS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "predictions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": DAILY_PICK_PROPERTIES,
                "required": list(DAILY_PICK_PROPERTIES),
            },
        }
    },
    "required": ["predictions"],
}

# Network-level failures worth one more attempt; APITimeoutError subclasses APIConnectionError
TRANSIENT_ERRORS = (openai.APIConnectionError,)


class OpenAICompatiblePredictionModel(BasePredictionModel):
    """
    Prediction model backed by an OpenAI-compatible chat-completions endpoint.

    Attributes:
        model_name (str): Model to request, e.g. "gemini-2.5-flash".
        temperature (float): Sampling temperature.
        max_retries (int): Extra attempts on transient network failure.
    """

    def __init__(
        self,
        client: openai.AsyncOpenAI,
        model_name: str,
        temperature: float = 0.3,
        max_retries: int = 1
    ):
        self.client = client
        self._model_name = model_name
        self.temperature = temperature
        self.max_retries = max_retries
        logger.info(f"Initialized prediction model {model_name}")

    @property
    def model_name(self) -> str:
        return self._model_name

    def _prepare_prompt(self, fixture: MatchFixture) -> str:
        return (
            f"Analyze the upcoming football match between {fixture.home_team} and "
            f"{fixture.away_team} in the {fixture.league}.\n"
            "Provide a detailed prediction including:\n"
            "1. Recommended bet (e.g., Home Win, Over 2.5, BTTS)\n"
            "2. Odds estimation (decimal odds)\n"
            "3. Confidence score (0-100)\n"
            "4. Detailed tactical analysis and reasoning.\n"
            "5. Whether the tip is strong enough to be an elite tip.\n\n"
            "Consider the latest team news, injuries, and recent form.\n"
            "Return a JSON object with the keys: prediction, odds, confidence, analysis, isElite."
        )

    def _prepare_daily_prompt(self, limit: int) -> str:
        return (
            f"Find the top {limit} highest confidence football match predictions for today.\n"
            f"Focus on major leagues ({', '.join(MAJOR_LEAGUES)}).\n"
            "Return a JSON object with a single key \"predictions\" holding an array of matches, "
            "each with: homeTeam, awayTeam, league, prediction, odds, confidence (0-100), "
            "analysis, isElite."
        )

    async def _complete(self, prompt: str, schema_name: str, schema: Dict[str, Any]) -> str:
        """
        Run one chat completion with timeout and bounded retry.

        Returns:
            str: Raw message content.

        Raises:
            GenerationFailed: On any API error or an empty response.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True
        )
        try:
            async for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(f"Retrying completion ({schema_name}) after transient failure")
                    response = await self.client.chat.completions.create(
                        model=self._model_name,
                        messages=[
                            {"role": "system", "content": SYSTEM_PROMPT},
                            {"role": "user", "content": prompt}
                        ],
                        temperature=self.temperature,
                        response_format={
                            "type": "json_schema",
                            "json_schema": {"name": schema_name, "schema": schema}
                        }
                    )
        except openai.OpenAIError as e:
            logger.error(f"Completion request failed: {str(e)}")
            raise GenerationFailed() from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error("Completion returned no content")
            raise GenerationFailed()
        return content

    async def predict(self, fixture: MatchFixture) -> PredictionPayload:
        logger.info(f"Generating prediction for {fixture.home_team} vs {fixture.away_team}")
        raw_response = await self._complete(
            self._prepare_prompt(fixture), "match_prediction", PREDICTION_SCHEMA
        )
        try:
            return PredictionPayload.model_validate_json(raw_response)
        except ValidationError as e:
            logger.error(f"Rejected prediction payload: {str(e)}")
            raise GenerationFailed() from e

    async def daily_picks(self, limit: int = 3) -> List[DailyPickPayload]:
        logger.info(f"Generating daily bet slip with {limit} picks")
        raw_response = await self._complete(
            self._prepare_daily_prompt(limit), "daily_bet_slip", DAILY_PICKS_SCHEMA
        )
        try:
            picks = DailyPicksPayload.model_validate_json(raw_response).predictions
        except ValidationError as e:
            logger.error(f"Rejected daily slip payload: {str(e)}")
            raise GenerationFailed() from e
        if not picks:
            logger.error("Daily slip payload contained no predictions")
            raise GenerationFailed()
        return picks[:limit]


def create_prediction_model(settings: Settings) -> OpenAICompatiblePredictionModel:
    """
    Factory function to create the prediction model from settings.

    Raises:
        GenerationFailed: If no API key is configured.
    """
    if not settings.GEMINI_API_KEY:
        logger.error("GEMINI_API_KEY is not configured")
        raise GenerationFailed("AI service is not configured")

    client = openai.AsyncOpenAI(
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.LLM_BASE_URL,
        timeout=settings.LLM_TIMEOUT_SECONDS,
        # Retries are handled by tenacity
        max_retries=0
    )
    return OpenAICompatiblePredictionModel(
        client=client,
        model_name=settings.LLM_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        max_retries=settings.LLM_MAX_RETRIES
    )
