"""
@file: middleware.py
@description:
This module configures and centralizes middleware and client hosting for the
FastAPI application.

The components include:
- CORS configuration: Controls which domains can access the API
- Request logging: Logs information about each request and its processing time
- Client hosting: serves the built single-page client in production; in
  development the client runs on its own dev server and CORS is opened for it

@dependencies:
- fastapi / starlette: For CORSMiddleware, BaseHTTPMiddleware and StaticFiles
- nerdytips.core.config: For application settings
- nerdytips.core.logger: For structured logging
"""

import time
from pathlib import Path
from typing import Callable

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from nerdytips.core.config import Settings
from nerdytips.core.logger import setup_logger, log_request_details

# Create a component-specific logger
logger = setup_logger("nerdytips.core.middleware")


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    In development mode, this allows all origins, headers, and methods.
    In production, only the configured origins are allowed.

    Args:
        app: The FastAPI application instance
        settings: Application settings
    """
    origins = ["*"]

    if settings.is_production:
        origins = list(settings.CORS_ORIGINS)

    logger.info(f"Setting up CORS middleware with origins: {origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=86400,  # 24 hours cache for preflight requests
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging API requests and their processing time.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        log_request_details(logger, request, process_time, response.status_code)
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


def setup_request_logging(app: FastAPI) -> None:
    """
    Add request logging middleware to the FastAPI application.
    """
    logger.info("Setting up request logging middleware")
    app.add_middleware(RequestLoggingMiddleware)


def setup_client_hosting(app: FastAPI, settings: Settings) -> None:
    """
    Serve the built client from STATIC_DIR in production.

    Existing files are returned as-is; any other non-API path falls back to
    index.html so the client-side router can handle it. Must be called after
    the API routers are included.

    Args:
        app: The FastAPI application instance
        settings: Application settings
    """
    if not settings.is_production:
        logger.info(f"Development mode: client is served by its dev server at {settings.CLIENT_DEV_URL}")
        return

    static_dir = Path(settings.STATIC_DIR).resolve()
    index_file = static_dir / "index.html"
    if not index_file.is_file():
        logger.warning(f"No built client found at {static_dir}; only the API will be served")
        return

    assets_dir = static_dir / "assets"
    if assets_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_client(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")

        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(static_dir):
            return FileResponse(candidate)
        return FileResponse(index_file)

    logger.info(f"Serving built client from {static_dir}")


def setup_all_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure and add all middleware to the FastAPI application.

    Args:
        app: The FastAPI application instance
        settings: Application settings
    """
    setup_request_logging(app)
    # Added last so it wraps everything, including logged error responses
    setup_cors(app, settings)
