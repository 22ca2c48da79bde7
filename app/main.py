# app/main.py

"""Posts API - blog post CRUD service built on FastAPI."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.configs import settings
from app.errors import (
    MalformedIdError,
    NotFoundError,
    StorageError,
    ValidationError,
    posts_exception_handler,
    request_validation_exception_handler,
    storage_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import posts_router
from app.schemas import HealthCheckResponse

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog post CRUD API",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

routes = [posts_router]

_ = [app.include_router(router, prefix=settings.API_PREFIX) for router in routes]

errors = [
    (ValidationError, validation_exception_handler),
    (MalformedIdError, posts_exception_handler),
    (NotFoundError, posts_exception_handler),
    (StorageError, storage_exception_handler),
    (SQLAlchemyError, storage_exception_handler),
    (RequestValidationError, request_validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    f"{settings.API_PREFIX}/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"status": "OK", "message": "Server is running"},
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint.

    Returns
    -------
    HealthCheckResponse
        Static liveness payload; the database is not queried.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "OK", "message": "Server is running"}
    """
    return HealthCheckResponse()


if __name__ == "__main__":
    from uvicorn import run

    run(app, host=settings.HOST, port=settings.PORT, log_level="info")
