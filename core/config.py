"""
Configuration Management Module

This module handles loading, validating, and providing access to proxy configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Validates listen port, log level, CORS methods and rate-limit quota
- Provides type-safe access to configuration values
- Converts comma-separated strings to lists (origins, methods)
- Auth is optional: it is only enabled when API_KEY is set

Usage:
    from core.config import settings

    print(settings.port)
    print(settings.allowed_origins_list)  # Returns a list of strings
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from limits import parse


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_CORS_METHODS = ["GET", "POST", "OPTIONS"]


class Settings(BaseSettings):
    """
    Proxy Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        host: Listen address for the uvicorn server
        port: Listen port (PORT)
        api_key: Shared secret; when set every route except /health requires it
        api_key_header: Header carrying the shared secret
        allowed_origin: Comma-separated CORS allow-list, or "*"
        allowed_methods: Comma-separated CORS methods ("GET" or "GET,POST,OPTIONS")
        rate_limit: Per-caller quota in `limits` notation ("10/second", "100/15 minutes")
        rate_limit_headers: Echo RateLimit-* headers to the client
        request_timeout: Upstream timeout in seconds
        environment: Current environment (development, production)
        log_level: Logging level
    """

    # ============================================
    # Server Configuration
    # ============================================

    host: str = Field(
        default="0.0.0.0",
        description="Server host address"
    )

    port: int = Field(
        default=3000,
        description="Server port"
    )

    environment: str = Field(
        default="development",
        description="Application environment (development, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # ============================================
    # Authentication
    # ============================================

    api_key: str = Field(
        default="",
        description="Shared API key (empty = authentication disabled)"
    )

    api_key_header: str = Field(
        default="x-api-key",
        description="Request header carrying the API key"
    )

    # ============================================
    # CORS Configuration
    # ============================================

    allowed_origin: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins, or '*'"
    )

    allowed_methods: str = Field(
        default="GET",
        description="Comma-separated list of allowed CORS methods"
    )

    # ============================================
    # Rate Limiting & Upstream
    # ============================================

    rate_limit: str = Field(
        default="10/second",
        description="Per-caller request quota, e.g. '10/second' or '100/15 minutes'"
    )

    rate_limit_headers: bool = Field(
        default=False,
        description="Send RateLimit-Limit / RateLimit-Remaining / RateLimit-Reset headers"
    )

    request_timeout: float = Field(
        default=30.0,
        description="Upstream HTTP request timeout in seconds"
    )

    # ============================================
    # Pydantic Settings Configuration
    # ============================================

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=".env",
        # Ignore extra fields in .env that aren't defined here
        extra="ignore",
        # Case-insensitive environment variable matching
        case_sensitive=False
    )

    # ============================================
    # Custom Properties
    # ============================================

    @property
    def allowed_origins_list(self) -> List[str]:
        """
        Convert comma-separated CORS origins string to a list.

        Example:
            >>> Settings(allowed_origin="https://a.com, https://b.com").allowed_origins_list
            ['https://a.com', 'https://b.com']
        """
        origins = [origin.strip() for origin in self.allowed_origin.split(",") if origin.strip()]
        return origins or ["*"]

    @property
    def allowed_methods_list(self) -> List[str]:
        """Convert comma-separated CORS methods string to an uppercase list."""
        return [m.strip().upper() for m in self.allowed_methods.split(",") if m.strip()]

    @property
    def auth_enabled(self) -> bool:
        """True when an API key is configured."""
        return bool(self.api_key)


# ============================================
# Global Settings Instance
# ============================================

# Loaded once and reused as the process default
settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration(config: Settings = None) -> None:
    """
    Validate critical configuration settings on application startup.

    Args:
        config: Settings to check (defaults to the global instance)

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # logging.py imports config.py, so import lazily
    from core.logging import logger

    config = config or settings

    if not (1 <= config.port <= 65535):
        raise ValueError(f"Invalid port number: {config.port}. Must be between 1 and 65535")

    if config.log_level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if not config.allowed_methods_list:
        raise ValueError("ALLOWED_METHODS must contain at least one method")

    for method in config.allowed_methods_list:
        if method not in VALID_CORS_METHODS:
            raise ValueError(
                f"Invalid CORS method: '{method}'. "
                f"Must be one of: {', '.join(VALID_CORS_METHODS)}"
            )

    try:
        parse(config.rate_limit)
    except ValueError as e:
        raise ValueError(f"Invalid RATE_LIMIT: '{config.rate_limit}' ({e})") from e

    if config.request_timeout <= 0:
        raise ValueError(f"Invalid REQUEST_TIMEOUT: {config.request_timeout}. Must be positive")

    logger.info("Configuration validated successfully")
    logger.info(f"Server: {config.host}:{config.port}")
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Auth: {'enabled (' + config.api_key_header + ')' if config.auth_enabled else 'disabled'}")
    logger.info(f"CORS origins: {', '.join(config.allowed_origins_list)}")
    logger.info(f"Rate limit: {config.rate_limit}")
    logger.info(f"Log level: {config.log_level.upper()}")
