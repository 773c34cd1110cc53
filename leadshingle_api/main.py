import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from leadshingle_api.api.responses import json_response
from leadshingle_api.api.routes import contact, demo
from leadshingle_api.core.config import _ENV_FILE, Settings
from leadshingle_api.core.errors import ApiError
from leadshingle_api.services.email_service import EmailSender, build_email_sender

if os.getenv("ENV") != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return json_response(request.app.state.settings, exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Router errors (wrong method, unknown path) in the same {ok, error} shape."""
    error = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return json_response(request.app.state.settings, exc.status_code, error)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the real error; the browser only gets a generic message."""
    logger.exception("Unhandled exception: %s", exc)
    return json_response(request.app.state.settings, 500, "Internal server error")


def create_app(settings: Settings | None = None, email_sender: EmailSender | None = None) -> FastAPI:
    """Build the app. Settings are read once here and handed to handlers via app.state."""
    settings = settings or Settings()
    app = FastAPI(
        title="LeadShingle API",
        description="Contact form relay and demo booking for the marketing site",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.email_sender = email_sender or build_email_sender(settings)

    app.include_router(contact.router, prefix="/api")
    app.include_router(demo.router, prefix="/api")

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    if app.state.email_sender is None:
        logger.warning("Email: NOT configured. Set RESEND_API_KEY or SMTP_* in %s", _ENV_FILE)
    else:
        logger.info("Email: configured (%s)", type(app.state.email_sender).__name__)
    return app


app = create_app()
