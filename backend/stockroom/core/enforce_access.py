"""Access Enforcement — identity extraction from token claims and role gating.

Invariants:
    - A claim set lacking id, login or role yields UnauthenticatedError, never a partial Identity
    - require_role is an exact string match — no role hierarchy
    - Absent identity and wrong role both yield ForbiddenError

Design Decisions:
    - Pure functions over decoded claims: signature/expiry checks live in the token
      codec (infrastructure), everything after decoding is testable without keys
"""

from stockroom.core.domain_types import Identity, Role, UserId
from stockroom.core.errors import ForbiddenError, UnauthenticatedError


REQUIRED_CLAIMS: tuple[str, ...] = ("id", "login", "role")


def identity_from_claims(claims: dict) -> Identity:
    """Build an Identity from decoded token claims."""
    if not isinstance(claims, dict):
        raise UnauthenticatedError()
    if any(claims.get(key) in (None, "") for key in REQUIRED_CLAIMS):
        raise UnauthenticatedError()

    user_id = claims["id"]
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise UnauthenticatedError()
    login, role = claims["login"], claims["role"]
    if not isinstance(login, str) or not isinstance(role, str):
        raise UnauthenticatedError()
    return Identity(id=UserId(user_id), login=login, role=role)


def require_role(identity: Identity | None, role: Role | str) -> Identity:
    """Return the identity if it holds exactly `role`, else ForbiddenError."""
    required = role.value if isinstance(role, Role) else role
    if identity is None or identity.role != required:
        raise ForbiddenError(required)
    return identity
