"""Configuration management for the FastAPI server.

This module handles configuration loading from environment variables,
providing sensible defaults for development and production. OAuth
client credentials are not held here: they are read per request by
``GoogleOAuthConfig.from_env`` so a missing secret surfaces as a 500
instead of preventing startup.
"""

import logging

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application configuration settings.

    Attributes:
        app_name: Application name
        version: Application version
        debug: Debug mode flag
        cors_origins: List of allowed CORS origins
        host: Server host address
        port: Server port number
        rate_limit_requests: Requests allowed per client IP per window (0 disables)
        rate_limit_window_seconds: Rate limit window length
    """

    app_name: str = "Job Search Coach Token Service"
    version: str = "1.0.0"
    debug: bool = False

    # Token endpoints are called straight from the browser
    cors_origins: list[str] = ["*"]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Rate limiting (per client IP)
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    class Config:
        """Pydantic configuration."""
        env_prefix = "JOBSEARCH_"
        case_sensitive = False


# Global settings instance
settings = Settings()
