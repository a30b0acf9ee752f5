"""
Access-control policy: an ordered table of (path pattern, required access) rules.

Rules are evaluated top to bottom and the first matching rule decides. Patterns are
either exact paths ("/login") or prefixes ending in "/**" ("/user/**"), which match the
prefix itself and everything below it.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from poseidon.schemas.auth import Principal

# Required-access markers used in the rule table.
PERMIT_ALL = "permitAll"
AUTHENTICATED = "authenticated"

AUTHORITY_PREFIX = "ROLE_"


class Decision(str, Enum):
    """Outcome of evaluating the policy for one request."""

    PERMIT = "permit"
    LOGIN_REQUIRED = "login_required"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessRule:
    """One row of the policy table. access is PERMIT_ALL, AUTHENTICATED or an authority."""

    pattern: str
    access: str

    def matches(self, path: str) -> bool:
        return path_matches(self.pattern, path)


def has_role(role: str) -> str:
    """Authority string required for role (e.g. "ADMIN" -> "ROLE_ADMIN")."""
    return f"{AUTHORITY_PREFIX}{role}"


def path_matches(pattern: str, path: str) -> bool:
    """Match an exact pattern or a "/prefix/**" pattern against a request path."""
    if pattern == "/**":
        return True
    if pattern.endswith("/**"):
        prefix = pattern[: -len("/**")]
        return path == prefix or path.startswith(prefix + "/")
    return path == pattern


DEFAULT_RULES: tuple[AccessRule, ...] = (
    AccessRule("/", PERMIT_ALL),
    AccessRule("/login", PERMIT_ALL),
    AccessRule("/logout", PERMIT_ALL),
    AccessRule("/error", PERMIT_ALL),
    AccessRule("/health", PERMIT_ALL),
    AccessRule("/css/**", PERMIT_ALL),
    AccessRule("/js/**", PERMIT_ALL),
    AccessRule("/images/**", PERMIT_ALL),
    AccessRule("/user/**", has_role("ADMIN")),
    AccessRule("/**", AUTHENTICATED),
)


class AccessPolicy:
    """Small interpreter over an ordered rule table."""

    def __init__(self, rules: Iterable[AccessRule] = DEFAULT_RULES) -> None:
        self.rules: Sequence[AccessRule] = tuple(rules)

    def rule_for(self, path: str) -> AccessRule | None:
        for rule in self.rules:
            if rule.matches(path):
                return rule
        return None

    def evaluate(self, path: str, principal: Principal | None) -> Decision:
        """
        Decide whether a request for path by principal (None = anonymous) may proceed.

        Paths matched by no rule require authentication.
        """
        rule = self.rule_for(path)
        access = rule.access if rule is not None else AUTHENTICATED
        if access == PERMIT_ALL:
            return Decision.PERMIT
        if principal is None:
            return Decision.LOGIN_REQUIRED
        if access == AUTHENTICATED:
            return Decision.PERMIT
        if principal.has_authority(access):
            return Decision.PERMIT
        return Decision.FORBIDDEN
