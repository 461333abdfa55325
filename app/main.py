import logging
from typing import Optional

import uvicorn
from litestar import Litestar, Request
from litestar.config.cors import CORSConfig
from litestar.datastructures import State
from litestar.exceptions import HTTPException
from litestar.plugins.sqlalchemy import SQLAlchemyAsyncConfig, SQLAlchemyInitPlugin
from litestar.response import Response
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from app.auth.authorship import AuthorVerifier, FieldMatchVerifier
from app.config import Settings, get_settings
from app.errors import FeedbackError
from app.models import Base  # Import models Base for table creation
from app.routes import ROUTES
from app.utils.logging import configure_logging, log_request_error, request_context

logger = logging.getLogger("Feedbacks")


# --- Exception handlers
def handle_feedback_error(request: Request, exc: FeedbackError) -> Response:
    """Render domain errors as {"error": message} with their status code."""
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        # Cause was logged where it was caught
        logger.error(f"{exc.message} | Context: {request_context(request)}")
    else:
        logger.info(f"{exc.status_code} {request.method} {request.url.path}: {exc.message}")
    return Response(
        content=exc.to_response(),
        status_code=exc.status_code,
        media_type="application/json",
    )


def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Framework errors (unknown route, malformed body, bad path parameter)."""
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        log_request_error(request, exc)
    else:
        logger.info(f"{exc.status_code} {request.method} {request.url.path}: {exc.detail}")
    return Response(
        content={"error": exc.detail},
        status_code=exc.status_code,
        media_type="application/json",
    )


def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc, message="Unhandled exception occurred")
    return Response(
        content={"error": "Internal Server Error"},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/json",
    )


# --- App init
def create_app(
    settings: Optional[Settings] = None,
    verifier: Optional[AuthorVerifier] = None,
) -> Litestar:
    """
    Build the Litestar application.

    The SQLAlchemy plugin owns the engine for the lifetime of the app and hands
    each request its own session. Tables are only created automatically in
    debug mode; production databases are initialized with deploy/init_db.py.
    """
    settings = settings or get_settings()
    configure_logging(settings.debug)

    logger.info(f"Starting app in {'DEBUG' if settings.debug else 'PRODUCTION'} mode")
    logger.info(
        f"List order: {settings.sort_order}, ownership field: {settings.owner_field}"
    )

    # --- SQLAlchemy config
    config = SQLAlchemyAsyncConfig(
        connection_string=settings.database_url,
        session_dependency_key="session",
        metadata=Base.metadata,
        create_all=settings.debug,  # Auto-create tables on startup (dev only)
    )

    return Litestar(
        route_handlers=ROUTES,
        debug=settings.debug,
        plugins=[SQLAlchemyInitPlugin(config)],
        cors_config=CORSConfig(allow_origins=settings.cors_allow_origins),
        state=State({
            "settings": settings,
            "author_verifier": verifier or FieldMatchVerifier(settings.owner_attribute),
        }),
        exception_handlers={
            FeedbackError: handle_feedback_error,
            HTTPException: handle_http_exception,
            Exception: log_exceptions,
        },
    )


app = create_app()


def main() -> None:
    settings = app.state.settings
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
