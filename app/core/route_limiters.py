"""
Description:
This module sets up a rate limiter for the application using SlowAPI.
It initializes a Limiter instance with a key function to identify clients by their IP address. The default limit
and an on/off switch come from the application settings, so local test runs can disable limiting.

Dependencies:
- slowapi: For rate limiting functionality.
- slowapi.util: For utility functions like get_remote_address to retrieve the client's IP address.
- loguru: For logging information about the rate limiter initialization.

Author: @kcaparas1630
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger
from app.core.config import get_settings

_settings = get_settings()

# LLM-backed endpoints share the default limit per IP
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.rate_limit_default],
    enabled=_settings.rate_limit_enabled,
)
DEFAULT_LIMIT = _settings.rate_limit_default
logger.info(f"Rate limiter initialized (enabled={_settings.rate_limit_enabled}, default={DEFAULT_LIMIT})")
