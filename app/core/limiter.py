from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# default_limits is enforced by SlowAPIMiddleware; the per-day recomputation
# endpoints carry the tighter COMPUTE_RATE_LIMIT through the decorator.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_minute}/minute"],
    enabled=not settings.is_testing,
)

COMPUTE_RATE_LIMIT = f"{settings.compute_rate_limit_per_minute}/minute"
