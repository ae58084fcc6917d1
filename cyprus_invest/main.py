"""
Main FastAPI application entry point.
"""

import logging
import math

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cyprus_invest import __version__
from cyprus_invest.config import get_settings
from cyprus_invest.api import router as api_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Cyprus property acquisition, yield and mortgage calculations",
    version=__version__,
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


def _json_safe(value):
    """Replace NaN/Infinity (which JSON cannot carry) with their string form."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return 422 with the offending input echoed back in JSON-safe form."""
    errors = _json_safe(jsonable_encoder(exc.errors()))
    logger.warning(f"Invalid request to {request.url.path}: {errors}")
    return JSONResponse(status_code=422, content={"detail": errors})


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}
