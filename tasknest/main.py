"""
TaskNest - main application module.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .core.config import Settings, get_settings
from .core.database import Database
from .core.errors import AppError, UnexpectedError, ValidationError, app_error_handler
from .core.jwt_handler import TokenService
from .core.logging import setup_logging
from .core.validation import first_error_message
from .routers import admin, auth, tasks, weather
from .services.weather import WeatherClient
from .utils.security import PasswordHasher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database on startup, release clients on shutdown"""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.service_name}...")
    try:
        app.state.database.init_db()
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    owns_weather_client = app.state.weather_client is None
    if owns_weather_client:
        app.state.weather_client = WeatherClient.from_settings(settings)
    logger.info(f"{settings.service_name} startup completed")

    yield

    logger.info(f"Shutting down {settings.service_name}...")
    if owns_weather_client:
        await app.state.weather_client.close()
        app.state.weather_client = None
    app.state.database.dispose()
    logger.info(f"{settings.service_name} shutdown completed")


def create_app(
    settings: Optional[Settings] = None,
    weather_client: Optional[WeatherClient] = None,
) -> FastAPI:
    """Build the application around one settings object."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="TaskNest",
        description="Task management service with JWT authentication",
        version=settings.service_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.weather_client = weather_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Process-Time"] = str(process_time)
        if request.url.path != "/health":
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")
        return response

    app.add_exception_handler(AppError, app_error_handler)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = first_error_message(exc.errors())
        logger.warning(f"Validation failed: {message}")
        return ValidationError(message).to_response()

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return UnexpectedError("Database operation failed").to_response()

    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(weather.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        db_healthy = app.state.database.check_connection()
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time(),
        }

    return app


def run():
    import uvicorn
    uvicorn.run("tasknest.main:create_app", factory=True, host="0.0.0.0", port=3000)


if __name__ == "__main__":
    run()
