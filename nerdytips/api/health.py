"""
@file: health.py
@description:
Provides a simple health check endpoint to verify that the server
is running and that the database answers.

@dependencies:
- FastAPI APIRouter for route definitions.
- nerdytips.core.logger: For component-specific logging
"""

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from nerdytips.core.logger import setup_logger

# Create a component-specific logger
logger = setup_logger("nerdytips.api.health")

# Create a new router instance for health checks
router = APIRouter()

@router.get("/health", tags=["Health"])
def health_check(request: Request):
    """
    Health Check Endpoint

    Returns:
        dict: Overall status and database connectivity ("ok" or "unavailable").
    """
    logger.debug("Health check requested")
    try:
        request.app.state.database.ping()
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        database = "unavailable"

    return {
        "status": "OK" if database == "ok" else "DEGRADED",
        "database": database
    }
