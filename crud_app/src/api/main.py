import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import UpstreamError
from .logging_config import setup_logging
from .repositories import Repository, close_repository, get_repository
from .routers import data as data_router
from .schemas import MessageResponse
from .settings import get_settings
from .utils import error_envelope, validation_message

openapi_tags = [
    {"name": "health", "description": "Service liveness and database reachability."},
    {
        "name": "data",
        "description": "CRUD operations over the single records collection.",
    },
]

_settings = get_settings()
setup_logging(_settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release the shared repository (e.g. the hosted database HTTP client) on shutdown
    close_repository()


app = FastAPI(
    title="Data Service",
    description="Backend API brokering CRUD calls for a single records table to a hosted database.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)


# Registered before CORS so that CORS wraps it and 500 responses stay readable cross-origin
@app.middleware("http")
async def unhandled_error_envelope(request: Request, call_next):
    """Turn any exception not handled by a route into a 500 error envelope."""
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_envelope(str(exc)))


# Only the deployed client (FRONTEND_URL) may call the API from a browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Reject invalid requests with 400 before any database call.

    Response format:
        {"status": "error", "message": "Name is required"}
    """
    return JSONResponse(status_code=400, content=error_envelope(validation_message(exc.errors())))


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Surface database failures as 500 with the database message verbatim."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content=error_envelope(exc.message))


def get_repository_factory(request: Request) -> Callable[[], Repository]:
    """
    Return the repository provider without calling it, honouring dependency
    overrides, so the caller can handle construction failures itself.
    """
    return request.app.dependency_overrides.get(get_repository, get_repository)


# PUBLIC_INTERFACE
@app.get("/", summary="Root", tags=["health"], response_model=MessageResponse)
def root() -> MessageResponse:
    """
    Liveness endpoint.

    Returns:
        A JSON object confirming the service is running.
    """
    return MessageResponse(message="Backend running")


# PUBLIC_INTERFACE
@app.get("/api/health", summary="Health Check", tags=["health"], response_model=MessageResponse)
def health_check(
    repository_factory: Callable[[], Repository] = Depends(get_repository_factory),
) -> MessageResponse:
    """
    Report service health and database reachability.

    Always answers 200 with status "ok": a database failure, including a
    backend that cannot be opened or configured, only changes the message, so
    this is a liveness signal rather than a readiness one.
    """
    try:
        repository_factory().ping()
    except UpstreamError as e:
        logger.warning("Database check error: %s", e.message)
        return MessageResponse(message=f"Backend connected (DB: {e.message})")
    except Exception:
        logger.exception("Database check failed unexpectedly")
        return MessageResponse(message="Backend running")
    return MessageResponse(message="Backend and database connected")


# Include routers
app.include_router(data_router.router)
