"""
Logging setup and the per-request access logger.

``setup_logging`` configures the root logger exactly once with a
console handler and an optional file handler.  ``log_requests`` is an
HTTP middleware that records method, path, status and latency of every
request on the ``app.requests`` logger.
"""

import logging
import time
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from fastapi import Request, Response

request_logger = logging.getLogger("app.requests")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Send product API logs to stderr and, if ``LOG_FILE`` is set, a file.

    Runs once per process; later calls (the test suite re-importing
    ``app.main``) leave existing handlers alone.  uvicorn's own access
    log is silenced because ``log_requests`` already records each call.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    logging.getLogger("uvicorn.access").disabled = True


async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    request_logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
