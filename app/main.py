"""FastAPI application entry point.

Configures CORS, structured logging, the lifespan hook, request body error
handling and router registration.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from app.core.config import settings
from app.core.logging import setup_logging
from app.models.enums import StatusCode
from app.models.response import ResponseEnvelope
from app.routers import candidate_profiles, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    setup_logging()
    logger.info("Application starting up")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Candidate Profile API",
    description="Create, update, soft-delete, restore and look up candidate profiles",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Body shape errors are reported in the standard envelope
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    logger.warning("request_body_invalid", extra={"path": request.url.path})
    envelope = ResponseEnvelope.failure("", "\n".join(messages), StatusCode.bad_request)
    return JSONResponse(status_code=int(envelope.code), content=envelope.to_content())


# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(candidate_profiles.router, prefix="/api/v1", tags=["Candidate Profiles"])
