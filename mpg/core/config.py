import logging
import os

from pydantic import Field
from pydantic_settings import BaseSettings

from mpg.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _get_env_files() -> list[str]:
    """
    Get list of environment files to load in order of precedence.

    Configuration hierarchy (process env vars take highest precedence):
    1. Process environment variables - HIGHEST PRECEDENCE
    2. .env.{ENVIRONMENT} (environment-specific files)
    3. .env (base configuration file) - LOWEST PRECEDENCE

    ENVIRONMENT is read from the process environment only, defaulting to 'local'.
    It can be a comma-separated list (e.g., "ci,debug").

    Returns:
        List of environment file paths that exist
    """
    env_files = []

    environment_var = os.environ.get("ENVIRONMENT", "local")
    environments = [env.strip() for env in environment_var.split(",") if env.strip()]
    logger.debug(f"Using ENVIRONMENT={environment_var} -> environments={environments}")

    if os.path.exists(".env"):
        env_files.append(".env")
        logger.debug("Found base env file: .env")

    for environment in environments:
        env_specific = f".env.{environment}"
        if os.path.exists(env_specific):
            env_files.append(env_specific)
            logger.debug(f"Found environment-specific env file: {env_specific}")

    return env_files


class Settings(BaseSettings):
    model_config = {"env_file": _get_env_files(), "env_file_encoding": "utf-8", "extra": "ignore"}

    ENVIRONMENT: str = "local"

    # Password generation
    DEFAULT_PASSWORD_LENGTH: int = 16  # Used when the resource config leaves `length` unset
    SECURE_SHUFFLE: bool = True  # If False, shuffle positions with the faster non-secure source
    FIRST_CHAR_REDRAW_LIMIT: int = Field(default=256, ge=1)

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_TO_STDOUT: bool = False  # Only for standalone use, the host normally owns log output
    LOG_TO_FILE: bool = False  # Enable rotating file logging for the mpg logger
    LOG_FILE_PATH: str = "log.txt"  # Path to log file when LOG_TO_FILE is enabled


def _get_settings() -> Settings:
    settings = Settings()

    logger.debug(
        f"Settings loaded: DEFAULT_PASSWORD_LENGTH={settings.DEFAULT_PASSWORD_LENGTH}, "
        f"SECURE_SHUFFLE={settings.SECURE_SHUFFLE}, FIRST_CHAR_REDRAW_LIMIT={settings.FIRST_CHAR_REDRAW_LIMIT}"
    )
    if not settings.SECURE_SHUFFLE:
        logger.warning("SECURE_SHUFFLE is disabled - password positions are shuffled with a non-secure source")

    return settings


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Apply the logging settings to the ``mpg`` logger.

    Importing MPG never configures logging; the embedding process calls this once at startup.
    """
    return setup_logging(
        log_level=settings.LOG_LEVEL,
        log_to_stdout=settings.LOG_TO_STDOUT,
        log_to_file=settings.LOG_TO_FILE,
        log_file_path=settings.LOG_FILE_PATH,
    )


settings = _get_settings()
