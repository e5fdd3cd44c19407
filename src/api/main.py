"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.routers import bookmarks, health
from core.config import get_settings
from db.session import init_db
from services.exceptions import BookmarkError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if app_settings.bookmark_store == "sql" and app_settings.create_tables:
        await init_db()
    logger.info("Bookmarks API started (store=%s)", app_settings.bookmark_store)

    yield


def _error_body(message: str) -> dict:
    return {"error": {"message": message}}


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="Create, list, update and delete rated bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(BookmarkError)
async def bookmark_exception_handler(request: Request, exc: BookmarkError) -> JSONResponse:
    """Return validation, not-found and store errors in the API error shape."""
    if exc.status_code >= 500:
        logger.error(
            "Bookmark store failure on %s %s", request.method, request.url.path, exc_info=exc,
        )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed request bodies (e.g. invalid JSON) are a 400 like any other bad input."""
    logger.warning(
        "Rejected request on %s %s: %s", request.method, request.url.path, exc.errors(),
    )
    return JSONResponse(status_code=400, content=_error_body("Invalid request body"))


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures are not retried; log and report a server error."""
    logger.error(
        "Bookmark store failure on %s %s", request.method, request.url.path, exc_info=exc,
    )
    message = str(exc) if get_settings().debug else "server error"
    return JSONResponse(status_code=500, content=_error_body(message))


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)
