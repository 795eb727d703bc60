"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from rentroll.api.routes import health, properties, tenants
from rentroll.core.config import settings
from rentroll.core.database import Base, engine
from rentroll.core.exceptions import AppError, format_error_messages
from rentroll.core.logging import configure_logging

# Import models for Base.metadata.create_all
from rentroll.models import property, tenant  # noqa: F401
from rentroll.web.routes import web_router

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


def error_body(detail: str | list[str]) -> dict:
    """Error envelope shared by every API error."""
    message = detail if isinstance(detail, str) else "Validation error"
    return {"success": False, "error": detail, "message": message}


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Property and tenant management API",
    lifespan=lifespan,
)

# Session middleware carries flash messages for the web pages
app.add_middleware(
    SessionMiddleware,  # type: ignore[arg-type]
    secret_key=settings.SECRET_KEY,
    session_cookie="rentroll_session",
    max_age=86400,
    same_site="lax",
    https_only=not settings.DEBUG,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors in the error envelope."""
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as a 400 with field messages."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(format_error_messages(exc.errors())),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their internals."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


# Mount static files
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(properties.router, prefix="/api")
app.include_router(tenants.router, prefix="/api")

# Include web routes (Jinja2 frontend)
app.include_router(web_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rentroll.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
