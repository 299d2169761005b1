"""Startup-time helpers for safe config logging."""

from typing import Any

from pixgate.common.config import Settings
from pixgate.common.logging import logger


SECRET_MARKERS = ["auth", "key", "secret", "password", "token"]


def _redact(name: str, value: Any) -> Any:
    """Hide values of secret-like settings, keeping whether they are set."""

    if value in (None, ""):
        return "<unset>"
    if any(marker in name for marker in SECRET_MARKERS):
        return "<redacted>"
    return value


def log_startup_config(settings: Settings) -> None:
    """Log the effective settings once, for quick troubleshooting."""

    config = {name: _redact(name, value) for name, value in settings.model_dump().items()}
    logger.info("startup_config=%s", config)
