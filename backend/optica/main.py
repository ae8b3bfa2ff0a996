import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as SA_TimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from .api import api_lenses, api_prescription_ranges, api_user
from .core.config import Settings, load_settings
from .core.observability import setup_logging, setup_tracer
from .database import Database
from .schemas.health import HealthResponse
from .utils.auth import make_pwd_context
from .utils.errors import AppError, DatabaseError, error_envelope

logger = logging.getLogger(__name__)

_BODY_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _issue_field(loc) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _BODY_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "root"


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API around an explicitly constructed store handle."""
    settings = settings or load_settings()
    setup_logging(settings)

    # Always use ORJSONResponse for JSON payloads
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        default_response_class=ORJSONResponse,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.SQLALCHEMY_DATABASE_URL)
    app.state.started_at = time.monotonic()
    app.state.pwd_context = make_pwd_context(settings.BCRYPT_ROUNDS)
    setup_tracer(app, settings)

    # ─── Middleware ───────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS origins set to: %s", settings.CORS_ORIGINS)
    app.add_middleware(GZipMiddleware, minimum_size=1024)

    @app.middleware("http")
    async def catch_exceptions(request: Request, call_next):
        """Last line of defence: anything unhandled becomes a JSON 500."""
        try:
            return await call_next(request)
        except Exception as exc:  # pragma: no cover - generic handler
            logger.exception("Unhandled error: %s", exc)
            message = str(exc) if settings.is_development else "Internal Server Error"
            return error_envelope(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_SERVER_ERROR",
                message,
            )

    # ─── Exception handlers ───────────────────────────────────────────────────
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_envelope(request, exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Return validation errors as a 400 with one issue per offending field."""
        issues = [
            {
                "field": _issue_field(err.get("loc", ())),
                "message": err.get("msg", "Invalid value"),
                "code": err.get("type", "invalid"),
            }
            for err in exc.errors()
        ]
        return error_envelope(
            request,
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            "Validation failed",
            {"issues": issues},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = "NOT_FOUND" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTP_ERROR"
        return error_envelope(request, exc.status_code, code, str(exc.detail))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity error at %s: %s", request.url.path, exc.orig)
        return error_envelope(
            request,
            status.HTTP_409_CONFLICT,
            "CONFLICT",
            "Resource conflicts with existing data",
        )

    @app.exception_handler(SA_TimeoutError)
    async def db_timeout_handler(request: Request, exc: SA_TimeoutError):
        # DB pool timeout -> 503 to reduce retry storms
        return error_envelope(
            request,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "SERVICE_UNAVAILABLE",
            "Database busy, please retry",
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error at %s", request.url.path)
        err = DatabaseError(str(exc)) if settings.is_development else DatabaseError()
        return error_envelope(request, err.status_code, err.code, err.message)

    # ─── Routes ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["health"], response_model=HealthResponse)
    async def health():
        """Liveness probe: the process can respond; does not touch the DB."""
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            uptime=round(time.monotonic() - app.state.started_at, 3),
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
        )

    api_prefix = settings.API_V1_STR  # usually something like "/api/v1"
    app.include_router(api_lenses.router, prefix=f"{api_prefix}")
    app.include_router(api_prescription_ranges.router, prefix=f"{api_prefix}")
    app.include_router(api_user.router, prefix=f"{api_prefix}")

    @app.on_event("startup")
    def bootstrap_database() -> None:
        database: Database = app.state.database
        database.create_all()
        if settings.SEED_ON_STARTUP:
            from .seed import seed_database

            seed_database(database)
        logger.info("Database ready at %s", database.engine.url.render_as_string(hide_password=True))

    @app.on_event("shutdown")
    def dispose_database() -> None:
        app.state.database.dispose()

    return app


app = create_app()
