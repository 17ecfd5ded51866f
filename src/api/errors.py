"""
Engine error to HTTP status mapping shared by the card routes.

Layout routes turn template resolution failures into a placeholder before
reaching here.
"""

import logging

from fastapi import HTTPException, status

from src.core.errors import EngineError, NotFound, StoreUnavailable, TemplateMismatch

logger = logging.getLogger(__name__)


def http_error(exc: EngineError) -> HTTPException:
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, TemplateMismatch):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, StoreUnavailable):
        logger.warning("Store unavailable: %s", exc)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable",
            headers={"Retry-After": "1"},
        )
    logger.error("Unmapped engine error: %s", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
