"""Main FastAPI application."""

from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from hiring_portal.api.routes import api_router
from hiring_portal.api.routes import chat
from hiring_portal.config import settings
from hiring_portal.core.exceptions import PortalError, ValidationError
from hiring_portal.core.logging import setup_logging
from hiring_portal.core.scheduler import create_scheduler, get_scheduler_status, start_scheduler, stop_scheduler
from hiring_portal.services.auto_responder import AutoResponder
from hiring_portal.services.messaging_hub import MessagingHub
from hiring_portal.services.storage_factory import get_repository
from hiring_portal.utils.demo_data import seed_demo_data

# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)

# Initialize Sentry for error tracking (only if DSN is properly configured)
if settings.SENTRY_DSN and settings.SENTRY_DSN.startswith("https://"):
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=None,
                event_level="ERROR",
            ),
        ],
        release=settings.APP_VERSION,
        attach_stacktrace=True,
        send_default_pii=False,
    )
else:
    logger.info("sentry_disabled", reason="SENTRY_DSN not configured")


ENDPOINTS = [
    ("POST", "/register", "Register new user"),
    ("POST", "/login", "Login user"),
    ("POST", "/projects", "Submit project"),
    ("GET", "/projects", "Get all projects (managers only)"),
    ("POST", "/saved-projects", "Save project (managers only)"),
    ("GET", "/saved-projects", "Get saved projects (managers only)"),
    ("GET", "/messages/{project_id}", "Get messages for project"),
    ("GET", "/analytics", "Get analytics for all candidates (managers only)"),
    ("GET", "/analytics/{email}", "Get analytics for a specific candidate (managers only)"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: one repository, one scheduler and one hub per process
    repository = get_repository()
    scheduler = create_scheduler()
    auto_responder = AutoResponder(repository, scheduler)
    hub = MessagingHub(repository, auto_responder)

    app.state.repository = repository
    app.state.scheduler = scheduler
    app.state.auto_responder = auto_responder
    app.state.hub = hub

    if settings.SEED_DEMO_DATA:
        seed_demo_data(repository)

    start_scheduler(scheduler)
    logger.info(
        "server_ready",
        port=settings.PORT,
        endpoints=[f"{method} {settings.API_PREFIX}{path} - {summary}" for method, path, summary in ENDPOINTS],
        chat="/ws/chat",
    )
    yield
    # Shutdown
    stop_scheduler(scheduler)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Hiring portal: project submissions, manager/candidate chat and candidate analytics",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={
        "persistAuthorization": True,
    },
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(chat.router, tags=["Chat"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint."""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint with scheduler, hub and storage status."""
    state = request.app.state
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "storage": state.repository.stats(),
        "hub": state.hub.stats(),
        "auto_reply": state.auto_responder.stats(),
        "scheduler": get_scheduler_status(state.scheduler),
    }


@app.exception_handler(PortalError)
async def portal_exception_handler(request: Request, exc: PortalError):
    """Domain errors carry their own status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete request bodies are a 400, as before any mutation."""
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={
            "detail": ValidationError.default_detail,
            "errors": jsonable_encoder([{"loc": err["loc"], "msg": err["msg"]} for err in exc.errors()]),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred",
        },
    )
