"""
Application entry point. FastAPI app with middleware and routers.
Run: uvicorn main:app --host 0.0.0.0 --port 8080
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import health_router, students_router
from core.config import Settings, get_settings
from core.database import Database
from core.exceptions import InvalidInputError, StudentsAPIError
from core.middleware import INTERNAL_ERROR_BODY, RequestLoggingMiddleware
from repositories import SqlStudentRepository, StudentRepository
from utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create the schema when AUTO_MIGRATE is on.
    Shutdown: close the connection pool.
    """
    settings: Settings = app.state.settings
    logger: logging.Logger = app.state.logger
    database: Database = app.state.database
    logger.info(
        "startup",
        extra={
            "app": settings.APP_NAME,
            "env": settings.ENVIRONMENT,
            "log_level": settings.LOG_LEVEL,
        },
    )
    if settings.AUTO_MIGRATE:
        try:
            database.create_schema()
        except SQLAlchemyError as exc:
            # Keep serving so /healthcheck can report the outage
            logger.error("schema_creation_failed", extra={"error": str(exc)})
    yield
    logger.info("shutdown", extra={"app": settings.APP_NAME})
    database.dispose()


def create_app(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    repository: StudentRepository | None = None,
    logger: logging.Logger | None = None,
) -> FastAPI:
    """Factory for FastAPI app. Collaborators can be injected for testing."""
    settings = settings or get_settings()
    logger = logger or configure_logging(settings)
    if database is None:
        database = Database(
            settings.DATABASE_URL,
            logger.getChild("database"),
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DATABASE_POOL_SIZE,
        )
    if repository is None:
        repository = SqlStudentRepository(database, logger.getChild("students"))

    app = FastAPI(
        title=settings.APP_NAME,
        description="Stanford University students API",
        version="1.0.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.logger = logger
    app.state.database = database
    app.state.student_repository = repository

    app.add_middleware(RequestLoggingMiddleware, logger=logger.getChild("http"))

    app.include_router(health_router)
    app.include_router(students_router)

    @app.exception_handler(StudentsAPIError)
    async def api_error_handler(request: Request, exc: StudentsAPIError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown routes and wrong methods share the {"error": ...} body shape
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Path ids are parsed by get_student_pk, so anything left here is the body
        errors = exc.errors()
        error = InvalidInputError("Invalid request body")
        logger.warning(
            "validation_failed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "reason": error.detail,
                "errors": [
                    {"loc": list(err.get("loc", ())), "type": err.get("type")} for err in errors
                ],
            },
        )
        return JSONResponse(status_code=error.status_code, content={"error": error.detail})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # Route errors are caught by RequestLoggingMiddleware; this covers the middleware stack itself
        logger.exception("unhandled_exception", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    s = app.state.settings
    uvicorn.run(
        "main:app",
        host=s.HOST,
        port=s.PORT,
        reload=s.ENVIRONMENT == "development",
        log_level=s.LOG_LEVEL.lower(),
    )
