"""
Username/password authentication against the users table.

resolve_credentials is a pure lookup that distinguishes unknown usernames;
authenticate collapses every failure into one generic BadCredentialsError so the
login page never reveals which credential was wrong.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from poseidon.core.access import has_role
from poseidon.core.security import PasswordHasher
from poseidon.models.user import User
from poseidon.schemas.auth import Principal

logger = logging.getLogger(__name__)

BAD_CREDENTIALS_MESSAGE = "Invalid username or password."

# Verified against when the username is unknown so both failure paths cost one bcrypt check.
_DUMMY_DIGEST = "$2b$10$C6UzMDM.H6dfI/f/IKcEeO5Rt8Bp4aWy1iGMzsH4T0P1kBwlUwQ.a"


class UsernameNotFoundError(Exception):
    """Raised when no account has the requested username."""

    def __init__(self, username: str) -> None:
        self.username = username
        self.message = f"User not found: {username}"
        super().__init__(self.message)


class BadCredentialsError(Exception):
    """Raised for any failed login; the message never says which credential was wrong."""

    def __init__(self, message: str = BAD_CREDENTIALS_MESSAGE) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Credentials:
    """Stored credentials for one account."""

    username: str
    digest: str
    role: str

    @property
    def authority(self) -> str:
        return has_role(self.role)


def resolve_credentials(db: Session, username: str) -> Credentials:
    """Return the stored digest and role for username. Raises UsernameNotFoundError."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise UsernameNotFoundError(username)
    return Credentials(username=user.username, digest=user.password, role=user.role)


def authenticate(
    db: Session, hasher: PasswordHasher, username: str, password: str
) -> Principal:
    """Check a username/password pair and return the principal to store in the session."""
    try:
        credentials = resolve_credentials(db, username)
    except UsernameNotFoundError:
        hasher.verify(password, _DUMMY_DIGEST)
        logger.info("Login failed: unknown username")
        raise BadCredentialsError() from None
    if not hasher.verify(password, credentials.digest):
        logger.info("Login failed: bad password for username=%s", username)
        raise BadCredentialsError()
    logger.info("Login succeeded: username=%s role=%s", username, credentials.role)
    return Principal(username=credentials.username, authorities=(credentials.authority,))
