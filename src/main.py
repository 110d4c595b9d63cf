import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.config.database import run_migrations
from src.config.logging import setup_logging
from src.config.settings import settings
from src.errors import (
    AuthorizationError,
    ConflictError,
    DependencyError,
    DomainError,
    ExpiredError,
    NotFoundError,
    ValidationError,
)
from src.guests.routers import router as guests_router
from src.headcount.routers import router as headcount_router
from src.invitations.routers import router as invitations_router
from src.notifications.routers import router as notifications_router
from src.routers.healthz.router import router as healthz_router
from src.weddings.routers import router as weddings_router

setup_logging()
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 422),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ExpiredError, 410),
    (AuthorizationError, 403),
    (DependencyError, 503),
)


def status_code_for(error: DomainError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations()
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding Planner API",
    description="API for wedding guests, RSVPs, headcounts and invitations",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(weddings_router, tags=["Weddings"])
app.include_router(guests_router, tags=["Guests"])
app.include_router(headcount_router, tags=["Headcount"])
app.include_router(invitations_router, tags=["Invitations"])
app.include_router(notifications_router, tags=["Notifications"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding Planner API"}
