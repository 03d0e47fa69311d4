"""Access Enforcement — tests for claim decoding and role gating.

Tests cover:
    - identity_from_claims builds an Identity from complete claims
    - Missing, empty or mistyped claims raise UnauthenticatedError
    - require_role is exact match; None identity and wrong role are Forbidden
"""

import pytest

from stockroom.core.domain_types import Identity, Role, UserId
from stockroom.core.enforce_access import identity_from_claims, require_role
from stockroom.core.errors import ForbiddenError, UnauthenticatedError


def test_identity_from_complete_claims():
    identity = identity_from_claims(
        {"id": 3, "login": "admin", "role": "admin", "exp": 123},
    )
    assert identity == Identity(id=UserId(3), login="admin", role="admin")


@pytest.mark.parametrize("missing", ["id", "login", "role"])
def test_identity_missing_claim_is_unauthenticated(missing):
    claims = {"id": 3, "login": "admin", "role": "admin"}
    del claims[missing]
    with pytest.raises(UnauthenticatedError):
        identity_from_claims(claims)


@pytest.mark.parametrize("claims", [
    {"id": "3", "login": "admin", "role": "admin"},
    {"id": True, "login": "admin", "role": "admin"},
    {"id": 3, "login": "", "role": "admin"},
    {"id": 3, "login": "admin", "role": 1},
])
def test_identity_malformed_claims_are_unauthenticated(claims):
    with pytest.raises(UnauthenticatedError):
        identity_from_claims(claims)


def test_identity_non_dict_is_unauthenticated():
    with pytest.raises(UnauthenticatedError):
        identity_from_claims(["id", "login", "role"])


def test_require_role_admin_passes():
    admin = Identity(id=UserId(1), login="admin", role="admin")
    assert require_role(admin, Role.ADMIN) is admin


def test_require_role_accepts_plain_string():
    admin = Identity(id=UserId(1), login="admin", role="admin")
    assert require_role(admin, "admin") is admin


def test_require_role_user_is_forbidden_for_admin_gate():
    user = Identity(id=UserId(2), login="maria", role="user")
    with pytest.raises(ForbiddenError) as exc:
        require_role(user, Role.ADMIN)
    assert exc.value.http_status == 403
    assert exc.value.required_role == "admin"


def test_require_role_without_identity_is_forbidden():
    with pytest.raises(ForbiddenError):
        require_role(None, Role.ADMIN)


def test_require_role_has_no_hierarchy():
    admin = Identity(id=UserId(1), login="admin", role="admin")
    with pytest.raises(ForbiddenError):
        require_role(admin, Role.USER)


def test_require_role_is_case_sensitive():
    shouty = Identity(id=UserId(1), login="admin", role="ADMIN")
    with pytest.raises(ForbiddenError):
        require_role(shouty, Role.ADMIN)
