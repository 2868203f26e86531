"""
FastAPI Application Factory

Wires settings, service clients, middleware, exception handlers, routes
and (optionally) the built single-page client into one ASGI app.

Every failure leaves the API as a JSON body of the form
{"error": message}. Backend errors are passed through unsanitized.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance_tracker import __version__
from finance_tracker.api.dependencies import get_clients
from finance_tracker.api.routes import router as api_router
from finance_tracker.config import Settings, get_settings, validate_all_settings
from finance_tracker.errors import ApiError
from finance_tracker.logger import configure_logging, get_logger
from finance_tracker.services.clients import ServiceClients, create_service_clients
from finance_tracker.services.storage import StorageError, StorageUnavailableError


logger = get_logger(__name__)


class SinglePageApp(StaticFiles):
    """Static files with a fallback to index.html for client-side routes."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or path.startswith("api/"):
                raise
            return await super().get_response("index.html", scope)


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "Invalid request: " + "; ".join(parts)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": describe_validation_errors(exc)})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    status_code = 503 if isinstance(exc, StorageUnavailableError) else 500
    logger.error(
        "storage_error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    clients: Optional[ServiceClients] = None,
) -> FastAPI:
    """
    Build the ASGI application.

    Args:
        settings: Settings to use; the cached settings by default.
        clients: Pre-built clients (tests inject these); built from
                 settings when omitted.
    """
    settings = settings or get_settings()
    for name, error in validate_all_settings(settings).items():
        if name.endswith("_error"):
            logger.error("invalid_settings", section=name.removesuffix("_error"), error=error)

    app_settings = settings.app

    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    if clients is None:
        clients = create_service_clients(settings)

    app = FastAPI(title="Household Finance Tracker API", version=__version__)
    app.state.clients = clients

    # Registered before CORS so 500 responses still carry CORS headers.
    @app.middleware("http")
    async def convert_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return unhandled_error_response(request, exc)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        return response

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    @app.get("/health")
    def health(request: Request):
        clients = get_clients(request)
        return {
            "status": "ok",
            "version": __version__,
            "identity": clients.identity_configured,
            "database": clients.store_configured,
        }

    app.include_router(api_router)

    if app_settings.should_serve_static:
        if app_settings.static_path.is_dir():
            app.mount("/", SinglePageApp(directory=app_settings.static_path, html=True), name="client")
        else:
            logger.warning("static_dir_missing", static_dir=str(app_settings.static_path))

    return app
