"""
javapad HTTP API
================

Run with:
    uvicorn javapad.api.main:app --port 8001

Routes:
    POST   /api/v1/execution/run          run code, returns a RunReport
    POST   /api/v1/execution/stdin-hint   whether code reads stdin
    GET    /api/v1/snippets[?q=term]      caller's history, newest first
    GET    /api/v1/snippets/{id}
    DELETE /api/v1/snippets/{id}
    DELETE /api/v1/snippets               clear caller's history
"""

import asyncio
from contextlib import asynccontextmanager
import os
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from javapad import __version__
from javapad.api.deps import reset_dependencies
from javapad.config import get_config
from javapad.logging import configure_logging, get_logger, shutdown_logging
from javapad.services.editor import CONNECTIVITY_NOTE
from javapad.services.execution import AllProvidersExhausted, ExecutionError
from javapad.services.execution.http_client import close_shared_http_client

logger = get_logger("API")

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev", "local", "test", "testing"})
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def get_safe_detail(exc: Exception) -> str | None:
    """
    Exception text for development environments, None elsewhere.

    Provider errors can embed endpoint URLs and response bodies, which must
    not reach clients in production.
    """
    if os.getenv("ENVIRONMENT", "").strip().lower() not in DEVELOPMENT_ENVIRONMENTS:
        return None
    return str(exc).strip() or None


def _status_code_or_500(value: object) -> int:
    try:
        code = int(value)
    except (TypeError, ValueError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return code if 100 <= code <= 599 else status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, error: str, message: str, exc: Exception) -> JSONResponse:
    content = {"error": error, "message": message}
    detail = get_safe_detail(exc)
    if detail:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start logging from configuration; release pooled connections on the way out."""
    config = get_config()
    configure_logging(
        console_output=True,
        file_output=config.logging.save_to_file,
        log_level=config.logging.level,
        log_dir=config.logging.log_dir,
    )
    logger.info(
        "javapad %s starting; provider chain: %s",
        __version__,
        " -> ".join(p.name for p in config.execution.providers),
    )

    yield

    logger.info("javapad shutting down")
    try:
        await close_shared_http_client()
    except Exception as e:
        logger.error(f"Error closing shared HTTP client: {e}")
    reset_dependencies()
    shutdown_logging()


app = FastAPI(
    title="javapad API",
    version=__version__,
    lifespan=lifespan,
    # no 307 slash redirects: they downgrade https behind a reverse proxy
    redirect_slashes=False,
)


def _include_routers(app: FastAPI) -> None:
    from javapad.api.routers import execution, snippets

    app.include_router(execution.router, prefix="/api/v1/execution", tags=["execution"])
    app.include_router(snippets.router, prefix="/api/v1/snippets", tags=["snippets"])


_include_routers(app)


@app.exception_handler(ExecutionError)
async def execution_error_handler(request: Request, exc: ExecutionError) -> JSONResponse:
    """
    Map execution-service errors to HTTP responses.

    AllProvidersExhausted: 502, the upstream execution APIs are unreachable.
    Any other ExecutionError (e.g. a misconfigured chain): 500.
    """
    if isinstance(exc, AllProvidersExhausted):
        logger.warning(f"All execution providers failed: {exc}")
        return _error_response(
            status.HTTP_502_BAD_GATEWAY,
            "providers_unavailable",
            f"Java code execution is currently unavailable. {CONNECTIVITY_NOTE}",
            exc,
        )

    logger.error(f"Execution error: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "execution_error",
        "An error occurred while executing the code.",
        exc,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Sanitized 500 for anything uncaught; HTTPException keeps its status and detail."""
    if isinstance(exc, (KeyboardInterrupt, SystemExit, asyncio.CancelledError)):
        raise exc
    logger.error(f"Unhandled exception on {request.url.path}: {exc}")

    if isinstance(exc, HTTPException):
        return _error_response(
            _status_code_or_500(exc.status_code),
            "internal_server_error",
            str(exc.detail or GENERIC_ERROR_MESSAGE),
            exc,
        )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_server_error",
        GENERIC_ERROR_MESSAGE,
        exc,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("javapad.api.main:app", host="0.0.0.0", port=8001)
