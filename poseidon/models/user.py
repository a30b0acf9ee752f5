"""ORM model for application users (session auth and RBAC)."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class User(Base):
    """
    User account for session authentication and role-based access control.

    password holds a BCrypt digest, never plaintext. role: 'ADMIN' or 'USER'.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    fullname = Column(String(100), nullable=False)
    role = Column(String(16), nullable=False, default="USER")
