"""Request id propagation, access logging and CORS."""

import sys
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from doubtout.config import settings

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one access line per response.

    An incoming ``X-Request-ID`` is reused so ids can be followed across
    services; otherwise a UUID4 is generated. The id is bound to every log
    record emitted while the request is handled.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "{method} {path} -> {status_code}",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=elapsed_ms,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stdout, as JSON lines in production."""
    logger.remove()
    logger.add(
        sys.stdout,
        level=level,
        serialize=settings.is_production,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[request_id]}</cyan> | "
            "{name}:{line} - <level>{message}</level>"
        ),
    )
    logger.configure(extra={"request_id": "-"})


def register_middleware(app: FastAPI) -> None:
    """Install the logging and CORS middleware on the app."""
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
