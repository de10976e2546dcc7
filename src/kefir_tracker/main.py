"""
Module: main.py
Description: FastAPI application entry point for the Kefir Tracker API.

Initializes the FastAPI application with all routes, middleware,
and error handlers. The exception handlers registered here are the only
place domain errors become HTTP status codes and response bodies.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from kefir_tracker.config.settings import settings
from kefir_tracker.handlers.batches import router as batches_router
from kefir_tracker.handlers.devices import router as devices_router
from kefir_tracker.handlers.events import router as events_router
from kefir_tracker.handlers.export import router as export_router
from kefir_tracker.handlers.public import router as public_router
from kefir_tracker.handlers.reminders import router as reminders_router
from kefir_tracker.utils.errors import AppError
from kefir_tracker.utils.logger import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    get_request_context,
)
from kefir_tracker.utils.validation import PathParameterError, ValidationError

configure_logging(settings.log_level)
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Track home kefir fermentation batches, timelines and reminders",
    version=settings.app_version,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Tag every log line of a request with its API Gateway request id and route."""
    clear_request_context()
    event = request.scope.get("aws.event") or {}
    request_id = (event.get("requestContext") or {}).get("requestId") or str(uuid.uuid4())
    bind_request_context(request_id=request_id, method=request.method, path=request.url.path)

    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


# Include routers
app.include_router(batches_router)
app.include_router(events_router)
app.include_router(reminders_router)
app.include_router(devices_router)
app.include_router(export_router)
app.include_router(public_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns basic application health information. Requires no identity.
    """
    logger.info("Health check requested")

    return {
        "status": "ok",
        "message": "Kefir Tracker API is healthy",
        "version": settings.app_version,
        "environment": settings.stage
    }


# Global exception handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """
    Domain error handler.

    Maps service errors onto their status code with an ``{"error": ...}`` body.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        status_code=exc.status_code,
        code=exc.code,
        detail=exc.message,
        path=request.url.path,
        method=request.method
    )

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(
        "Request validation failed",
        errors=exc.errors,
        path=request.url.path,
        method=request.method
    )

    return JSONResponse(status_code=400, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Body validation errors raised by FastAPI, reported like every other validation error."""
    return await validation_error_handler(request, ValidationError.from_error_list(exc.errors()))


@app.exception_handler(PathParameterError)
async def path_parameter_error_handler(request: Request, exc: PathParameterError):
    logger.error(
        "Missing path parameter",
        parameter=exc.name,
        path=request.url.path,
        method=request.method
    )

    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Router-level HTTP errors.

    Unmatched paths and unmatched methods on a known path both answer
    404 "Route not found".
    """
    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )

    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Route not found"})

    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.

    Logs unexpected exceptions and returns a generic error response;
    the underlying error is never sent to the client.

    Runs outside the request middleware, so the request id header is
    set here from the bound log context.
    """
    logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=exc
    )

    response = JSONResponse(status_code=500, content={"error": "Internal server error"})
    request_id = get_request_context().get("request_id")
    if request_id:
        response.headers["X-Request-Id"] = request_id
    return response


# Lambda handler
handler = Mangum(app, lifespan="off")
