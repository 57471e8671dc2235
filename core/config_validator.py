# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    if not settings.BACKEND_API_URL:
        missing.append("BACKEND_API_URL")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of warnings.
    """
    warnings = []

    if not settings.CONSOLE_DOMAIN:
        warnings.append("CONSOLE_DOMAIN (optional but recommended)")

    if settings.COUNTDOWN_TICK_SECONDS != 1:
        warnings.append(
            f"COUNTDOWN_TICK_SECONDS={settings.COUNTDOWN_TICK_SECONDS} (console expects a 1 second countdown)"
        )

    if settings.ELECTION_REFRESH_SECONDS < settings.COUNTDOWN_TICK_SECONDS:
        warnings.append("ELECTION_REFRESH_SECONDS is shorter than the countdown tick")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if missing_optional:
        for warning in missing_optional:
            logger.warning(f"Configuration warning: {warning}")

    logger.info("Configuration validation passed")
