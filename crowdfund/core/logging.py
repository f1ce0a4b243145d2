"""
Structured logging setup and request logging middleware
"""
import logging
import sys
import time

import structlog
from fastapi import Request

from crowdfund.core.config import Settings

logger = structlog.get_logger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure structlog once per process"""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=logging.INFO)

    renderer = structlog.processors.JSONRenderer() if settings.is_production else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests"""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "",
        user_agent=request.headers.get("user-agent", ""),
    )

    response = await call_next(request)

    latency = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        latency_seconds=round(latency, 3),
    )

    return response
