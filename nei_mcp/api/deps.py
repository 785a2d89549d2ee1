"""FastAPI dependency injection functions.

This module contains shared dependencies for API endpoints:
- Engine lookup from application state
- Error sanitization
"""

import logging

from fastapi import HTTPException, Request

from ..engine import NeiEngine

logger = logging.getLogger(__name__)


# ============ ENGINE ============


def get_engine(request: Request) -> NeiEngine:
    """Return the engine created during application startup."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Server is not initialized")
    return engine


# ============ ERROR SANITIZATION ============


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Returns a generic message for unexpected errors while preserving
    useful information for known error types.
    """
    error_str = str(error)

    # Known safe error patterns that can be returned to client
    safe_patterns = [
        "Unknown tool",
        "Invalid parameter",
        "Sync failed",
    ]

    for pattern in safe_patterns:
        if pattern.lower() in error_str.lower():
            return error_str

    # Log the actual error for debugging
    logger.error(f"Tool execution error: {error}", exc_info=True)

    # Return generic message for unknown errors
    return "An internal error occurred while executing the tool."
