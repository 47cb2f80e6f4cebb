# backend/storefront/main.py

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .dependencies import build_lock_manager
from .errors import StorefrontError, format_validation_errors
from .locks import LockManager, RedisLockManager
from .routers import backups, menu, orders, payment_settings, time_slots, uploads
from .services.backup_scheduler import backup_loop
from .services.backups import BackupService
from .storage import DocumentStore, JsonFileStore

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    locks: LockManager | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if settings.backup_scheduler_enabled:
            service = BackupService(app.state.store, settings.backups_dir, app.state.locks)
            task = asyncio.create_task(backup_loop(
                service,
                interval_seconds=settings.backup_interval_hours * 3600,
                keep=settings.backup_keep,
                run_on_start=settings.backup_on_startup,
            ))
        yield
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or JsonFileStore(settings.data_dir)
    app.state.locks = locks or build_lock_manager(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    for module in (menu, orders, time_slots, payment_settings, backups, uploads):
        app.include_router(module.router, prefix="/api")

    app.mount(
        "/images",
        StaticFiles(directory=settings.images_dir, check_dir=False),
        name="images",
    )

    # ===== Error handlers =====

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, format_validation_errors(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=exc)
        return _error(500, "Internal server error. Please try again.")

    @app.get("/api/health")
    def health():
        return {
            "status": "ok",
            "locks": "redis" if isinstance(app.state.locks, RedisLockManager) else "local",
        }

    return app


app = create_app()
