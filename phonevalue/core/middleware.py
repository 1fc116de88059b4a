import logging
import time
from fastapi import Request
from phonevalue.core.logger import get_logger

logger = get_logger("request_logger")

async def log_requests(request: Request, call_next):
    """Log each call with its status; quotes wait on two scrapes, so timing is worth keeping."""
    start_time = time.perf_counter()
    client_host = request.client.host if request.client else "unknown"
    response = await call_next(request)
    duration = time.perf_counter() - start_time

    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(
        level,
        f"{request.method} {request.url.path} from {client_host} "
        f"-> {response.status_code} in {duration:.3f}s",
    )
    return response
