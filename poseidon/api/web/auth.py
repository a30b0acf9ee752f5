"""Login, logout, landing and error pages."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from poseidon.api.deps import get_current_principal, get_password_hasher, get_session_registry
from poseidon.api.web.views import redirect
from poseidon.core.config import get_settings
from poseidon.core.database import get_db
from poseidon.core.security import PasswordHasher
from poseidon.core.sessions import SessionRegistry
from poseidon.core.templates import templates
from poseidon.schemas.auth import Principal
from poseidon.services.authentication import BadCredentialsError, authenticate

logger = logging.getLogger(__name__)

router = APIRouter()

LANDING_URL = "/home"
LOGIN_FAILURE_URL = "/login?error"
LOGOUT_SUCCESS_URL = "/login?logout"
ACCESS_DENIED_MESSAGE = "You are not authorized for the requested data."


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request) -> HTMLResponse:
    """Login form; ?error, ?logout and ?expired select the banner shown above it."""
    params = request.query_params
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "error": "error" in params,
            "logout": "logout" in params,
            "expired": "expired" in params,
        },
    )


@router.post("/login")
def login(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> RedirectResponse:
    """
    Check credentials and start a session.

    Any live session the user already holds elsewhere is evicted. Failures never say
    which credential was wrong.
    """
    settings = get_settings()
    try:
        principal = authenticate(db, hasher, username.strip(), password)
    except BadCredentialsError:
        return redirect(LOGIN_FAILURE_URL)

    # Never reuse a token presented before authentication.
    registry.invalidate(request.cookies.get(settings.SESSION_COOKIE_NAME))
    record = registry.register(principal.username, principal.authorities[0])

    response = redirect(LANDING_URL)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        record.token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return response


@router.api_route("/logout", methods=["GET", "POST"])
def logout(
    request: Request,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    principal: Annotated[Principal | None, Depends(get_current_principal)],
) -> RedirectResponse:
    settings = get_settings()
    registry.invalidate(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if principal is not None:
        logger.info("Logout: username=%s", principal.username)
    response = redirect(LOGOUT_SUCCESS_URL)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.get("/", response_class=HTMLResponse)
@router.get("/home", response_class=HTMLResponse)
def home(
    request: Request,
    principal: Annotated[Principal | None, Depends(get_current_principal)],
) -> HTMLResponse:
    return templates.TemplateResponse(request, "home.html", {"principal": principal})


@router.get("/403", response_class=HTMLResponse)
def access_denied(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "403.html",
        {"errorMsg": ACCESS_DENIED_MESSAGE},
        status_code=status.HTTP_403_FORBIDDEN,
    )


@router.get("/error", response_class=HTMLResponse)
def error_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "403.html", {"errorMsg": ACCESS_DENIED_MESSAGE})
