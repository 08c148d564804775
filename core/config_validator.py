# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger
from models.enums import RoutePolicy


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing or invalid required variables.
    """
    missing = []

    # Required for role lookups and token validation
    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    if settings.UNLISTED_ROUTE_POLICY not in RoutePolicy.list():
        missing.append(f"UNLISTED_ROUTE_POLICY (must be one of {RoutePolicy.list()})")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).
    """
    warnings = []

    if not settings.SUPABASE_ANON_KEY:
        warnings.append("SUPABASE_ANON_KEY (optional but recommended)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError in production if critical config is missing;
    elsewhere it only logs.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        if settings.ENV == "production":
            raise RuntimeError(error_msg)

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    if not missing_required:
        logger.info("Configuration validation passed")
