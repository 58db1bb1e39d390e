from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import logging

import uvicorn

from app.api.v1.endpoints.leads import legacy_router
from app.api.v1.router import router as api_v1_router
from app.core.exceptions import InvalidWizardStepError, LeadValidationError
from app.core.config import settings as app_settings
from app.core.rate_limit import limiter

# Configure logging
logging.basicConfig(level=app_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Roof Lead Intake",
    description="Multi-step roofing lead intake with deterministic lead scoring",
    version="0.1.0",
)

# Attach rate limiter state so slowapi middleware can find it
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware – restricted to configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in app_settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router)
app.include_router(legacy_router)


@app.exception_handler(LeadValidationError)
async def lead_validation_handler(request: Request, exc: LeadValidationError):
    # Field detail stays in the logs; the form only gets a generic message
    logger.warning("Validation Error on fields: %s", exc.fields)
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": exc.detail},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Request validation error: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation failed"},
    )


@app.exception_handler(InvalidWizardStepError)
async def invalid_wizard_step_handler(request: Request, exc: InvalidWizardStepError):
    logger.warning("Invalid wizard step: %s", exc.detail)
    return JSONResponse(
        status_code=404,
        content={"success": False, "error": exc.detail},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected/unhandled exceptions.

    Returns a generic 500 response so that raw stack traces are never
    leaked to the client.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal Server Error"},
    )


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=app_settings.HOST,
        port=app_settings.PORT,
        log_level=app_settings.LOG_LEVEL.lower(),
        reload=app_settings.DEBUG,
    )


if __name__ == "__main__":
    run()
