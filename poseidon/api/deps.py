"""Request-scoped dependencies: hasher, session registry, services and current principal."""

from typing import Annotated

from fastapi import Depends, Request

from poseidon.core.security import PasswordHasher
from poseidon.core.sessions import SessionRegistry
from poseidon.schemas.auth import Principal
from poseidon.services.user_service import UserService


def get_password_hasher(request: Request) -> PasswordHasher:
    """The application's password hasher (set on app.state at startup)."""
    return request.app.state.password_hasher


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry


def get_user_service(
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(hasher)


def get_current_principal(request: Request) -> Principal | None:
    """Principal attached by the access-control middleware; None for anonymous requests."""
    return getattr(request.state, "principal", None)
