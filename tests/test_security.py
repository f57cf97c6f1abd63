from datetime import timedelta

import pytest
from jose import jwt

from schoolhub.core.config import settings
from schoolhub.core.exceptions import UnauthenticatedError
from schoolhub.core.security import (
    Principal,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from schoolhub.schemas.enums import UserRole


def test_token_carries_role_and_home_school():
    principal = Principal(id="t1", role=UserRole.TEACHER, school_id="abc123", email="t1@example.com", name="Tom")
    assert decode_access_token(create_access_token(principal)) == principal


def test_super_admin_token_has_no_school():
    principal = decode_access_token(create_access_token(Principal(id="root", role=UserRole.SUPER_ADMIN)))
    assert principal.school_id is None
    assert principal.is_super_admin


def test_expired_token_is_rejected():
    token = create_access_token(
        Principal(id="t1", role=UserRole.TEACHER, school_id="abc123"),
        expires_delta=timedelta(minutes=-1)
    )
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode(
        {"sub": "t1", "role": "super_admin", "type": "access", "iss": settings.TOKEN_ISSUER},
        "not-the-secret",
        algorithm=settings.ALGORITHM
    )
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)


def test_unknown_role_is_rejected():
    token = jwt.encode(
        {"sub": "t1", "role": "janitor", "type": "access", "iss": settings.TOKEN_ISSUER},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)


def test_password_hashing():
    hashed = get_password_hash("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)
