"""
Logging Configuration Module

Configures the loguru logger used across the service. Outside production every
level down to DEBUG is written; in production DEBUG lines are dropped unless
LOG_LEVEL says otherwise. Each endpoint binds its name so lines read like
"[api/feedback] Request received".

Dependencies:
- loguru: For structured logging.
- app.core.config: For the environment and level settings.

Author: @kcaparas1630
"""
import sys
from loguru import logger
from app.core.config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[{extra[endpoint]}] {message}"
)


def configure_logging(settings: Settings) -> None:
    level = settings.log_level or ("INFO" if settings.is_production else "DEBUG")
    logger.remove()
    logger.configure(extra={"endpoint": "app"})
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, backtrace=False, diagnose=False)
    logger.info(f"Logging configured at level {level.upper()}")


def endpoint_logger(name: str):
    """Logger bound to an endpoint name, e.g. endpoint_logger("api/pause")."""
    return logger.bind(endpoint=name)
