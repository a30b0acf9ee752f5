"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from poseidon.api.middleware import AccessControlMiddleware
from poseidon.api.web import router as web_router
from poseidon.core.access import AccessPolicy
from poseidon.core.config import Settings, settings
from poseidon.core.database import SessionLocal
from poseidon.core.security import PasswordHasher
from poseidon.core.sessions import SessionRegistry
from poseidon.core.templates import STATIC_DIR, templates
from poseidon.services.seed import seed_default_users
from poseidon.services.user_service import UserService

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def _seed(app: FastAPI) -> None:
    db = SessionLocal()
    try:
        created = seed_default_users(db, UserService(app.state.password_hasher))
        logger.info("Default users seeded: created=%s", created)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Seeding default users failed; run `alembic upgrade head` first")
    finally:
        db.close()


def create_app(
    app_settings: Settings = settings,
    hasher: PasswordHasher | None = None,
    registry: SessionRegistry | None = None,
) -> FastAPI:
    """Build the application; hasher and registry may be supplied (e.g. by tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app_settings.APP_ENV == "dev" and app_settings.SEED_DEFAULT_USERS:
            _seed(app)
        yield

    app = FastAPI(
        title="Poseidon",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.password_hasher = hasher or PasswordHasher(rounds=app_settings.BCRYPT_ROUNDS)
    app.state.session_registry = registry or SessionRegistry(
        idle_timeout_seconds=app_settings.SESSION_IDLE_MINUTES * 60
    )
    app.state.access_policy = AccessPolicy()

    app.add_middleware(AccessControlMiddleware, cookie_name=app_settings.SESSION_COOKIE_NAME)
    app.mount("/css", StaticFiles(directory=str(STATIC_DIR / "css")), name="css")
    app.include_router(web_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_page(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"status_code": exc.status_code, "errorMsg": exc.detail},
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def bad_request_page(request: Request, exc: RequestValidationError) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"status_code": 400, "errorMsg": "The request could not be understood."},
            status_code=400,
        )

    return app


app = create_app()
