"""
HTTP middleware: request context, access logging and error responses.

Every request gets an id (the incoming X-Request-ID header or a fresh uuid4)
bound to the structlog context, so engine log lines emitted while serving the
request carry it too.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context_middleware(app: FastAPI) -> None:
    """
    Bind request metadata to the log context and time each request.

    Adds X-Request-ID and X-Process-Time headers to every response.
    """

    @app.middleware("http")
    async def request_context(request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_completed",
            status_code=response.status_code,
            process_time_ms=round(process_time * 1000, 2),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response


def setup_error_handling_middleware(app: FastAPI) -> None:
    """
    Turn unhandled exceptions into a JSON 500 response.

    Engine state errors never get here; they are recovered inside the engine.
    """

    @app.middleware("http")
    async def handle_errors(request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "unhandled_exception",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Internal server error",
                    "detail": str(e) if app.debug else "An unexpected error occurred",
                },
            )
