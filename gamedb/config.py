"""
GameDB API Configuration
Environment variable loading with validation and safe defaults
"""
import logging
import os

from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("sqlite", "postgresql")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(Exception):
    """Configuration validation error"""
    pass


def normalize_database_url(url: str) -> str:
    """Rewrite sync driver URLs to their async SQLAlchemy drivers"""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


class Config:
    """Application configuration with environment variable validation"""

    # Database configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/gamedb.db"
    DB_ECHO: bool = False
    DB_CREATE_SCHEMA: bool = True

    # Application configuration
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    APP_LOG_LEVEL: str = "INFO"

    def __init__(self, **overrides):
        """Initialize from the environment, then apply explicit overrides"""
        self._load_env_vars()
        for name, value in overrides.items():
            if not hasattr(type(self), name):
                raise ConfigError(f"Unknown configuration key: {name}")
            setattr(self, name, value)
        self.DATABASE_URL = normalize_database_url(self.DATABASE_URL)
        self._validate_config()

    def _load_env_vars(self) -> None:
        """Load optional environment variables with defaults"""
        self.DATABASE_URL = os.getenv("DATABASE_URL", self.DATABASE_URL)
        self.DB_ECHO = _env_flag("DB_ECHO", self.DB_ECHO)
        self.DB_CREATE_SCHEMA = _env_flag("DB_CREATE_SCHEMA", self.DB_CREATE_SCHEMA)

        self.APP_HOST = os.getenv("APP_HOST", self.APP_HOST)
        try:
            self.APP_PORT = int(os.getenv("APP_PORT", str(self.APP_PORT)))
        except ValueError:
            raise ConfigError("APP_PORT must be an integer")
        self.APP_LOG_LEVEL = os.getenv("APP_LOG_LEVEL", self.APP_LOG_LEVEL).upper()

    def _validate_config(self) -> None:
        """Validate configuration values"""
        if not 1 <= self.APP_PORT <= 65535:
            raise ConfigError("APP_PORT must be between 1 and 65535")

        if self.APP_LOG_LEVEL not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid APP_LOG_LEVEL: {self.APP_LOG_LEVEL} "
                f"(expected one of {', '.join(LOG_LEVELS)})"
            )

        try:
            backend = make_url(self.DATABASE_URL).get_backend_name()
        except ArgumentError:
            raise ConfigError(f"Invalid DATABASE_URL: {self.DATABASE_URL}")
        if backend not in SUPPORTED_BACKENDS:
            raise ConfigError(
                f"Unsupported database backend '{backend}': "
                f"must be one of {', '.join(SUPPORTED_BACKENDS)}"
            )


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("true", "1", "yes")
