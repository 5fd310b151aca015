from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.logging import get_logger
from app.services.swarm import SwarmError

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Map swarm domain errors to JSON error responses."""

    @app.exception_handler(SwarmError)
    async def swarm_error_handler(request: Request, exc: SwarmError):
        logger.info(f"{request.url.path} rejected: {exc.code} {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )
