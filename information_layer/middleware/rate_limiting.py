"""
Rate Limiting

Shared slowapi limiter, keyed by client address. Routers decorate their
endpoints with @limiter.limit(DEFAULT_RATE_LIMIT); main.py attaches the
limiter to app.state and registers the 429 handler.

Disable with RATE_LIMIT_ENABLED=false.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from information_layer.core.config import settings

DEFAULT_RATE_LIMIT = settings.rate_limit

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)
