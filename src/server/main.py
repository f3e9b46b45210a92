"""FastAPI application entry point.

This module initializes the FastAPI application with middleware,
routers, error handlers and core endpoints.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.oauth.exceptions import OAuthServiceError, UnknownError, ValidationError
from src.server import __version__
from src.server.api.tokens import router as tokens_router
from src.server.config import Settings, settings
from src.server.models.common import HealthResponse
from src.server.rate_limit import RateLimitMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Settings to use (module-level settings if omitted)

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        description="OAuth token exchange and refresh for the job search coach",
        version=__version__,
        debug=app_settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Last added runs first: CORS wraps the limiter so 429s carry CORS headers
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(tokens_router)

    @app.on_event("startup")
    async def startup_event():
        """Log configuration at startup (never the OAuth secret)."""
        logger.info(f"Starting {app_settings.app_name} v{__version__}")
        logger.info(f"Debug mode: {app_settings.debug}")
        logger.info(
            f"Rate limit: {app_settings.rate_limit_requests} requests / "
            f"{app_settings.rate_limit_window_seconds}s"
        )

    @app.get(
        "/health",
        response_model=HealthResponse,
        status_code=status.HTTP_200_OK,
        tags=["health"],
        summary="Health check endpoint",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Example:
            >>> GET /health
            >>> {"status": "healthy", "timestamp": "2026-02-01T10:00:00"}
        """
        return HealthResponse(status="healthy", timestamp=datetime.utcnow())

    @app.exception_handler(OAuthServiceError)
    async def oauth_error_handler(request: Request, exc: OAuthServiceError):
        """Render token service errors as ``{"error", "details"?}``."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report an unparseable or mistyped body as a 400 ValidationError."""
        details = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning(f"Invalid request body on {request.url.path}: {details}")
        error = ValidationError("Invalid request body", details=details)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        error = UnknownError(str(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
