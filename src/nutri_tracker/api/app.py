"""FastAPI application factory."""

import asyncio
import logging
import time
import traceback
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nutri_tracker.api.auth import router as auth_router
from nutri_tracker.api.meals import router as meals_router
from nutri_tracker.app_logging import configure_logging, log_unhandled_task_error
from nutri_tracker.config import parse_cors_origins
from nutri_tracker.containers import AppContainer
from nutri_tracker.errors import AppError

PRODUCTION = "production"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    expose_errors = container.settings.environment != PRODUCTION

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        asyncio.get_running_loop().set_exception_handler(log_unhandled_task_error)
        await app.state.container.database_monitor.connect()
        logger.info(
            "API ready",
            extra={"environment": app.state.container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={"duration_ms": round((time.perf_counter() - started) * 1000, 1)},
        )
        return response

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "%s on %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.detail or exc.message,
            )
        body: dict[str, object] = {"success": False, "message": exc.message}
        if exc.detail:
            body["error"] = exc.detail
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: "
            f"{error.get('msg', 'invalid')}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Invalid request", "error": problems},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path
        )
        body: dict[str, object] = {
            "success": False,
            "message": "Internal server error",
        }
        if expose_errors:
            body["error"] = {
                "type": type(exc).__name__,
                "message": str(exc),
                "stack": traceback.format_exception(exc),
            }
        return JSONResponse(status_code=500, content=body)

    app.include_router(auth_router)
    app.include_router(meals_router)

    @app.get("/health")
    async def health(request: Request) -> dict[str, str]:
        """Report process and database status."""
        state_container: AppContainer = request.app.state.container
        connected = await state_container.database_monitor.check()
        return {
            "status": "ok",
            "database": "connected" if connected else "disconnected",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "environment": state_container.settings.environment,
        }

    return app
