"""Default accounts created on startup in the dev environment."""

import logging

from sqlalchemy.orm import Session

from poseidon.schemas.user import Role
from poseidon.services.user_service import UserService

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "Password123!"

DEFAULT_USERS = (
    ("admin", "Administrator", Role.ADMIN),
    ("user", "Standard User", Role.USER),
)


def seed_default_users(db: Session, user_service: UserService) -> int:
    """Create the default admin and user accounts if absent. Returns the number created."""
    created = 0
    for username, fullname, role in DEFAULT_USERS:
        if user_service.exists_by_username(db, username):
            continue
        user_service.create_with_password(db, username, DEFAULT_PASSWORD, fullname, role)
        logger.info("Seeded default %s account: username=%s", role.value, username)
        created += 1
    return created
