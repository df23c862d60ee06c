import redis
import time
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from config.settings import Settings
from utilities.response import error_response

logger = logging.getLogger(__name__)

EXEMPT_PATHS = ["/health", "/docs", "/redoc", "/openapi.json"]

class RateLimitMiddleware(BaseHTTPMiddleware):
    """Redis-based fixed window rate limiting per client IP"""

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.requests_per_window = settings.RATE_LIMIT_REQUESTS
        self.window_size = settings.RATE_LIMIT_WINDOW  # seconds

        try:
            self.redis_client = redis.from_url(
                settings.REDIS_URL, decode_responses=True, socket_connect_timeout=1
            )
            self.redis_client.ping()
            logger.info("Connected to Redis for rate limiting")
        except redis.RedisError as e:
            logger.warning(f"Could not connect to Redis: {e}. Rate limiting disabled.")
            self.redis_client = None

    async def dispatch(self, request: Request, call_next):
        if not self.redis_client or request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        key = f"rate_limit:{client_ip}"

        try:
            current_requests = self.redis_client.incr(key)
            if current_requests == 1:
                self.redis_client.expire(key, self.window_size)
            ttl = self.redis_client.ttl(key)
        except redis.RedisError as e:
            logger.error(f"Rate limiting error: {e}")
            # If rate limiting fails, allow the request to proceed
            return await call_next(request)

        if current_requests > self.requests_per_window:
            logger.warning(f"Rate limit exceeded for {client_ip}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_response(
                    f"Maximum {self.requests_per_window} requests per {self.window_size} seconds allowed"
                ),
                headers={"Retry-After": str(max(ttl, 0))},
            )

        logger.debug(f"Rate limit count: {current_requests}/{self.requests_per_window} for {client_ip}")
        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.requests_per_window)
        response.headers["X-RateLimit-Remaining"] = str(max(0, self.requests_per_window - current_requests))
        response.headers["X-RateLimit-Reset"] = str(int(time.time()) + max(ttl, 0))

        return response
