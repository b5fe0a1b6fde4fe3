"""
app/core/limiter.py

Rate Limiter Configuration

SlowAPI limiter keyed by the client's remote address. Setting
RATE_LIMIT_ENABLED=false turns every `@limiter.limit` into a no-op.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# ---------------------------------------------------
# Rate Limiter Initialization
# ---------------------------------------------------
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
