"""Access-control filter: resolves the session cookie and applies the policy before any handler."""

import logging

from fastapi import Request, status
from fastapi.responses import RedirectResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from poseidon.core.access import AccessPolicy, Decision
from poseidon.core.sessions import SessionExpiredError, SessionRegistry
from poseidon.schemas.auth import Principal

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
LOGOUT_PATH = "/logout"
EXPIRED_URL = "/login?expired"
ACCESS_DENIED_PATH = "/403"


class AccessControlMiddleware(BaseHTTPMiddleware):
    """
    Attach request.state.principal from the session cookie, then evaluate the access policy.

    Anonymous requests for protected paths go to /login, authenticated requests lacking
    the required role go to /403, and expired or superseded sessions go to /login?expired.
    """

    def __init__(self, app: ASGIApp, cookie_name: str) -> None:
        super().__init__(app)
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        registry: SessionRegistry = request.app.state.session_registry
        policy: AccessPolicy = request.app.state.access_policy
        path = request.url.path

        principal: Principal | None = None
        try:
            record = registry.lookup(request.cookies.get(self.cookie_name))
        except SessionExpiredError as e:
            logger.info("Expired session presented: username=%s path=%s", e.username, path)
            if path not in (LOGIN_PATH, LOGOUT_PATH):
                return self._redirect(EXPIRED_URL, clear_cookie=True)
            record = None
        if record is not None:
            principal = Principal(username=record.username, authorities=(record.authority,))
        request.state.principal = principal

        decision = policy.evaluate(path, principal)
        if decision is Decision.LOGIN_REQUIRED:
            return self._redirect(LOGIN_PATH)
        if decision is Decision.FORBIDDEN:
            logger.info("Access denied: username=%s path=%s", principal.username, path)
            return self._redirect(ACCESS_DENIED_PATH)
        return await call_next(request)

    def _redirect(self, url: str, clear_cookie: bool = False) -> RedirectResponse:
        response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
        if clear_cookie:
            response.delete_cookie(self.cookie_name, path="/")
        return response
