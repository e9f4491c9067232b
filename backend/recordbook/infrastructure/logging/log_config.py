"""Centralized logging configuration.

Each logging category (SQL, HTTP client, uvicorn, request access log) gets
its own level from Settings, so a noisy one can be turned down without
touching the rest.

Development output is short and readable; other environments add
timestamps so the lines can be shipped to a log collector as they are.

Usage:
    from recordbook.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from recordbook.config import Settings, get_settings

ACCESS_LOGGER = "recordbook.access"

_DEV_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_PROD_FORMAT = "%(asctime)s %(levelname)-8s [%(process)d] %(name)s: %(message)s"


# ── Settings field → logger names ───────────────────────────────────

_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_http": ("httpx", "httpcore", "recordbook.client"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.error", "uvicorn.access"),
    "log_level_access": (ACCESS_LOGGER,),
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category levels, installing a stderr handler if none exists."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(_DEV_FORMAT if settings.is_development else _PROD_FORMAT)
        )
        root.addHandler(handler)

    levels = {}
    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        levels[settings_field] = logging.getLevelName(level)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug("Logging configured: root=%s %s", settings.log_level, levels)


def log_access(method: str, path: str, status_code: int, elapsed_ms: float) -> None:
    """One line per handled request, e.g. ``GET /api/records 200 4.1 ms``."""
    logger = logging.getLogger(ACCESS_LOGGER)
    level = logging.WARNING if status_code >= 500 else logging.INFO
    logger.log(level, "%s %s %d %.1f ms", method, path, status_code, elapsed_ms)


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, str(raw).upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
