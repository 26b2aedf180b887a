from __future__ import annotations

import jwt
import pytest

from board_service.domain.value_objects.enums import Role
from board_service.infrastructure.auth.claims import principal_from_claims
from board_service.infrastructure.auth.hs256_verifier import HS256Verifier

SECRET = "unit-test-secret-with-enough-length-for-hs256"


def _token(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.mark.asyncio
async def test_hs256_verifier_builds_admin_principal():
    verifier = HS256Verifier(SECRET)

    principal = await verifier.verify(_token({"sub": "1", "kind": "admin", "name": "Alice"}))

    assert principal.kind == Role.ADMIN
    assert principal.subject_id == "1"
    assert principal.display_name == "Alice"
    assert principal.is_admin


@pytest.mark.asyncio
async def test_hs256_verifier_rejects_foreign_signature():
    verifier = HS256Verifier(SECRET)

    with pytest.raises(jwt.InvalidSignatureError):
        await verifier.verify(_token({"sub": "1"}, secret="another-secret-with-enough-length-for-hs"))


def test_claims_numeric_subject_becomes_string():
    principal = principal_from_claims({"sub": 42, "role": "user", "username": "viewer"})

    assert principal.subject_id == "42"
    assert principal.kind == Role.USER
    assert principal.display_name == "viewer"
    assert not principal.is_admin


def test_claims_unknown_kind_falls_back_to_user():
    principal = principal_from_claims({"sub": "5", "kind": "superuser"})

    assert principal.kind == Role.USER


def test_claims_admin_role_grants_admin():
    principal = principal_from_claims({"sub": "5", "roles": ["admin"]})

    assert principal.is_admin


def test_claims_without_subject_rejected():
    with pytest.raises(ValueError):
        principal_from_claims({"kind": "admin"})
