"""Authenticated principal carried through a request."""

from pydantic import BaseModel


class Principal(BaseModel):
    """Authenticated user (username and granted authorities) for dependency injection."""

    username: str
    authorities: tuple[str, ...]

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities
