"""Password hashing (BCrypt) and password/username constraints for user accounts."""

import re

import bcrypt

# Default bcrypt cost; matches the usual BCrypt encoder strength.
DEFAULT_BCRYPT_ROUNDS = 10

# Min/max lengths for username, full name and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
FULLNAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# At least one uppercase letter, one digit and one symbol.
PASSWORD_STRENGTH_PATTERN = re.compile(
    r"^(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>?]).*$"
)

# bcrypt only looks at the first 72 bytes of the input.
_BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    BCrypt encode/verify.

    encode() salts every call, so encoding an already-encoded value yields a new digest
    that no longer verifies the original plaintext. Callers must only pass plaintext.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def encode(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, digest: str | None) -> bool:
        """Verify a plain password against a stored digest. Malformed digests never match."""
        if not plain_password or not digest:
            return False
        pw_bytes = plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, digest.encode("utf-8"))
        except (ValueError, TypeError):
            return False


def is_bcrypt_digest(value: str | None) -> bool:
    """True if value looks like a modular-crypt bcrypt digest ($2a$/$2b$/$2y$, 60 chars)."""
    if not value or len(value) != 60:
        return False
    return value[:4] in ("$2a$", "$2b$", "$2y$")
