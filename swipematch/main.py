# main.py
import logging
import time
from pathlib import Path

from dotenv import load_dotenv

# Ensure repo-root .env is loaded for the running server process.
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from swipematch.api.routes.health import router as health_router
from swipematch.config import build_sqlalchemy_db_url, media_dir, settings
from swipematch.database import Base, engine
from swipematch.models import Like, Match, User  # noqa: F401 - register tables on Base.metadata
from swipematch.routers import auth, users
from swipematch.routers.discover import router as discover_router
from swipematch.routers.matches import router as matches_router
from swipematch.routers.media import router as media_router
from swipematch.services.errors import SwipeMatchError


logger = logging.getLogger("swipematch.http")


async def swipematch_error_handler(request: Request, exc: SwipeMatchError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "error code=%s method=%s path=%s status=%s detail=%s",
        exc.code,
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled request error: method=%s path=%s", request.method, request.url.path)
            raise
        duration_ms = round((time.time() - start) * 1000, 2)
        if response.status_code >= 500:
            logger.error("HTTP %s %s -> %s in %sms", request.method, request.url.path, response.status_code, duration_ms)
        elif response.status_code >= 400:
            logger.warning("HTTP %s %s -> %s in %sms", request.method, request.url.path, response.status_code, duration_ms)
        else:
            logger.info("HTTP %s %s -> %s in %sms", request.method, request.url.path, response.status_code, duration_ms)
        return response

    application.add_exception_handler(SwipeMatchError, swipematch_error_handler)

    application.include_router(health_router)
    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(users.router, prefix="/users", tags=["users"])
    application.include_router(discover_router)
    application.include_router(matches_router)
    application.include_router(media_router)

    media_root = media_dir(settings)
    media_root.mkdir(parents=True, exist_ok=True)
    application.mount(settings.media_url_prefix, StaticFiles(directory=str(media_root)), name="media")

    # Production schemas are managed outside the app; sqlite dev/test databases are created on startup.
    if build_sqlalchemy_db_url(settings).startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
