"""
Main application entry point for the NerdyTips Backend API.

This module builds the FastAPI application with its middleware, routers,
error handling and client hosting. create_app() takes an optional Settings
instance so tests can run against a throwaway database; the module-level
`app` uses the environment-derived settings and is what uvicorn serves.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nerdytips.api import admin, auth, health, predictions, subscriptions
from nerdytips.core.config import Settings, settings as default_settings
from nerdytips.core.exceptions import NerdyTipsError
from nerdytips.core.logger import setup_logger
from nerdytips.core.middleware import setup_all_middleware, setup_client_hosting
from nerdytips.db.session import Database
from nerdytips.services import prediction_service

logger = setup_logger("nerdytips.main")

VERSION = "0.1.0"


def _error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {"error": "<message>"}."""

    @app.exception_handler(NerdyTipsError)
    async def handle_domain_error(request: Request, exc: NerdyTipsError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        else:
            message = "Invalid request"
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the environment-derived settings.

    Returns:
        FastAPI: The configured application.
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(app_settings.DATABASE_URL, echo=app_settings.DEBUG and app_settings.LOG_LEVEL == "DEBUG")
        database.create_all()
        app.state.database = database

        if app_settings.SEED_ON_STARTUP:
            with database.session() as db:
                prediction_service.seed_if_empty(db)

        logger.info(f"NerdyTips API started in {app_settings.APP_ENV} mode")
        try:
            yield
        finally:
            database.dispose()
            logger.info("NerdyTips API stopped")

    app = FastAPI(
        title="NerdyTips API",
        description="AI-powered football predictions",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.prediction_model = None

    setup_all_middleware(app, app_settings)
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/auth")
    app.include_router(predictions.router, prefix="/api/predictions")
    app.include_router(admin.router, prefix="/api/admin")
    app.include_router(subscriptions.router, prefix="/api/subscriptions")
    app.include_router(health.router, prefix="/api")

    # Catch-all client route must come after the API routes
    setup_client_hosting(app, app_settings)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "nerdytips.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG and not default_settings.is_production,
    )


if __name__ == "__main__":
    run()
