"""
Rate limiting shared by the gateway and the routers.

Requests are keyed by their bearer token so that users behind the same
address get separate buckets; anonymous requests fall back to the client IP.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from ..core.config import RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE

RATE_LIMIT = f"{RATE_LIMIT_PER_MINUTE}/minute"


def rate_limit_key(request: Request) -> str:
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return f"token:{token.strip()}"
    return get_remote_address(request)


limiter = Limiter(key_func=rate_limit_key, enabled=RATE_LIMIT_ENABLED)
