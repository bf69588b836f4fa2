from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from loguru import logger
from starlette.routing import Match

from core.exceptions import MethodNotAllowedError, XmlVaultError
from core.keys import ObjectKeyGenerator
from core.settings import Settings, get_settings
from core.storage import ObjectStorage, build_storage
from services.api.exception_handlers import unhandled_exception_handler, xmlvault_exception_handler
from services.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from services.api.routes import router as objects_router
from services.api.routers.validate import router as validate_router


NOT_FOUND_BODY = "<p>Oops, you walked the wrong path</p>"


def _base_app(settings: Settings, *, variant: str, description: str, tls: bool) -> FastAPI:
    app = FastAPI(title=f"XMLVault API ({variant})", version="0.1.0", description=description)
    app.state.settings = settings

    app.add_middleware(SecurityHeadersMiddleware, hsts=tls)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(XmlVaultError, xmlvault_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/healthz", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


def _add_fallback_route(app: FastAPI) -> None:
    """Answer every unmatched path with the fixed "wrong path" page.

    Registered as a plain Starlette route without a method list so that any
    verb reaches it, including ones outside ``ALL_METHODS``. A path owned by
    another route that only rejected the method is answered with 405.
    Must be registered after all other routes.
    """
    status_code = app.state.settings.http.not_found_status

    async def wrong_path(request: Request) -> HTMLResponse:
        for route in request.app.router.routes:
            if getattr(route, "endpoint", None) is wrong_path:
                continue
            match, _ = route.matches(request.scope)
            if match == Match.PARTIAL:
                raise MethodNotAllowedError(details={"method": request.method, "path": request.url.path})
        logger.debug("No route for {path}", path=request.url.path)
        return HTMLResponse(NOT_FOUND_BODY, status_code=status_code)

    app.router.add_route("/{path:path}", wrong_path, include_in_schema=False)


def create_app(
    settings: Settings | None = None,
    *,
    storage: ObjectStorage | None = None,
    key_generator: ObjectKeyGenerator | None = None,
) -> FastAPI:
    """Build the persisting service: ``POST /upload`` and ``GET /read``."""
    settings = settings or get_settings()
    app = _base_app(
        settings,
        variant="store",
        description="Stores raw XML uploads in object storage and serves them back by key",
        tls=True,
    )
    app.state.storage = storage if storage is not None else build_storage(settings.storage)
    app.state.key_generator = key_generator or ObjectKeyGenerator(prefix=settings.keys.prefix)

    @app.on_event("startup")
    async def _log_startup() -> None:
        logger.info(
            "Object service ready (backend={backend}, bucket={bucket})",
            backend=settings.storage.backend,
            bucket=settings.storage.bucket,
        )

    @app.on_event("shutdown")
    async def _log_shutdown() -> None:
        # keys are not persisted; the next process starts again at 1
        logger.info(
            "Object service stopping after {count} object keys issued",
            count=app.state.key_generator.issued,
        )

    app.include_router(objects_router)
    _add_fallback_route(app)
    return app


def create_validating_app(settings: Settings | None = None) -> FastAPI:
    """Build the validate-only service: ``POST /upload`` decodes XML, stores nothing."""
    settings = settings or get_settings()
    app = _base_app(
        settings,
        variant="validate",
        description="Checks that uploads are well-formed XML payloads",
        tls=False,
    )
    app.include_router(validate_router)
    _add_fallback_route(app)
    return app


__all__ = ["NOT_FOUND_BODY", "create_app", "create_validating_app"]
