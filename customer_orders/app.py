"""
Customer Orders Service - Main Application.

Wires together all layers:
- Models: SQLAlchemy entities (Customer, Order)
- Repositories: ORM data access
- Services: Customer and order use cases
- Routers: HTTP endpoints
"""

import time
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import init_db
from .domain.exceptions import (CustomerAlreadyExistsException,
                                CustomerNotFoundException,
                                DataIntegrityException, OrderNotFoundException,
                                OrderServiceException, PersistenceException,
                                ValidationException)
from .logging_config import configure_logging, get_logger
from .metrics import metrics_endpoint, track_request_metrics
from .metrics_middleware import PrometheusMiddleware
from .routers import customer_router, health_router, order_router

configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

logger = get_logger(__name__)

# Domain exception -> (HTTP status, error code)
ERROR_STATUS = {
    CustomerNotFoundException: (status.HTTP_404_NOT_FOUND, "not_found"),
    OrderNotFoundException: (status.HTTP_404_NOT_FOUND, "not_found"),
    CustomerAlreadyExistsException: (status.HTTP_409_CONFLICT, "conflict"),
    ValidationException: (status.HTTP_400_BAD_REQUEST, "validation_error"),
    DataIntegrityException: (status.HTTP_409_CONFLICT, "integrity_error"),
    PersistenceException: (status.HTTP_503_SERVICE_UNAVAILABLE, "database_error"),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Customer Orders Service", version=settings.SERVICE_VERSION)
    init_db()
    logger.info("Customer Orders Service started")

    yield

    logger.info("Customer Orders Service stopped")


app = FastAPI(
    title="Customer Orders Service",
    description="CRUD REST API for customers and their orders",
    version=settings.SERVICE_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With", "X-Request-ID"],
    expose_headers=["Content-Length", "Location", "X-Request-ID"],
    max_age=600,
)

app.add_middleware(PrometheusMiddleware, track_func=track_request_metrics)


# Request ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Bind a request id to the log context and echo it back."""
    request_id = request.headers.get("X-Request-ID") or f"req-{uuid4().hex[:16]}"
    request.state.request_id = request_id

    structlog.contextvars.bind_contextvars(request_id=request_id)
    start_time = time.time()
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["X-Request-ID"] = request_id
    logger.debug(
        "Request handled",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        request_id=request_id,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return response


app.include_router(customer_router.router)
app.include_router(order_router.router)
app.include_router(health_router.router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "status": "operational",
        "health": "/health",
        "ready": "/ready",
    }


@app.exception_handler(OrderServiceException)
async def domain_exception_handler(request: Request, exc: OrderServiceException):
    """Translate domain errors into JSON error responses."""
    status_code, error = ERROR_STATUS.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_server_error")
    )

    log = logger.warning if status_code < 500 else logger.error
    log(
        "Request failed",
        path=request.url.path,
        method=request.method,
        error=error,
        message=exc.message,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    # The request id middleware has already cleared the log context
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        request_id=request_id,
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "details": {"request_id": request_id},
        },
        headers={"X-Request-ID": request_id} if request_id else None,
    )


def main() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "customer_orders.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
