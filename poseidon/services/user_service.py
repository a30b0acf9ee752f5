"""User account management with encode-on-write password handling."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from poseidon.core.security import PasswordHasher, is_bcrypt_digest
from poseidon.models.user import User
from poseidon.schemas.user import Role, UserCreateForm, UserUpdateForm
from poseidon.services.crud import CrudService

logger = logging.getLogger(__name__)

DUPLICATE_USERNAME_MESSAGE = "Username already exists. Please choose another username."


def _require_digest(values: Mapping[str, Any]) -> None:
    if "password" in values and not is_bcrypt_digest(values["password"]):
        raise ValueError("User passwords must be stored as BCrypt digests")


class DuplicateUsernameError(Exception):
    """Raised when a write would give two accounts the same username."""

    def __init__(self, username: str, message: str = DUPLICATE_USERNAME_MESSAGE) -> None:
        self.username = username
        self.message = message
        super().__init__(message)


class UserService(CrudService[User]):
    """
    CRUD for users. Plaintext passwords enter only through create_with_password and
    update_with_new_password, which encode them exactly once before the write.
    """

    def __init__(self, hasher: PasswordHasher) -> None:
        super().__init__(User)
        self.hasher = hasher

    def find_by_username(self, db: Session, username: str) -> User | None:
        return db.query(User).filter(User.username == username).first()

    def exists_by_username(self, db: Session, username: str) -> bool:
        return self.find_by_username(db, username) is not None

    def create_with_password(
        self,
        db: Session,
        username: str,
        plain_password: str,
        fullname: str,
        role: Role | str,
    ) -> User:
        """Create an account, encoding the plaintext password. Raises DuplicateUsernameError."""
        if not plain_password:
            raise ValueError("Password must not be empty")
        return self.create(
            db,
            {
                "username": username,
                "password": self.hasher.encode(plain_password),
                "fullname": fullname,
                "role": Role(role).value,
            },
        )

    def create_from_form(self, db: Session, form: UserCreateForm) -> User:
        return self.create_with_password(
            db, form.username, form.password, form.fullname, form.role
        )

    def update_with_new_password(self, db: Session, user: User, plain_password: str) -> User:
        """Replace the stored digest with an encoding of a new plaintext password."""
        if not plain_password or not plain_password.strip():
            raise ValueError("New password must not be empty")
        user.password = self.hasher.encode(plain_password)
        db.commit()
        db.refresh(user)
        logger.info("Password changed for user id=%s", user.id)
        return user

    def update_from_form(self, db: Session, user_id: int, form: UserUpdateForm) -> User | None:
        """
        Apply an edit. Returns None if the id is absent.

        A form without a password keeps the stored digest; a form with one re-encodes it.
        Raises DuplicateUsernameError if the new username is taken (nothing is changed).
        """
        values: dict[str, Any] = {
            "username": form.username,
            "fullname": form.fullname,
            "role": Role(form.role).value,
        }
        if form.password:
            values["password"] = self.hasher.encode(form.password)
        return self.update(db, user_id, values)

    def create(self, db: Session, values: Mapping[str, Any]) -> User:
        """Insert an account; values["password"] must already be a BCrypt digest."""
        _require_digest(values)
        try:
            return super().create(db, values)
        except IntegrityError as e:
            self._rollback_duplicate(db, values)
            raise DuplicateUsernameError(str(values.get("username"))) from e

    def update(self, db: Session, record_id: int, values: Mapping[str, Any]) -> User | None:
        """Overwrite account fields; a password, when present, must already be a digest."""
        _require_digest(values)
        try:
            return super().update(db, record_id, values)
        except IntegrityError as e:
            self._rollback_duplicate(db, values)
            raise DuplicateUsernameError(str(values.get("username"))) from e

    def _rollback_duplicate(self, db: Session, values: Mapping[str, Any]) -> None:
        db.rollback()
        logger.info("Rejected duplicate username=%s", values.get("username"))
