# 보안 유닛 테스트 (DB 의존성 없음)
from datetime import timedelta

import jwt
import pytest

from perkhub.core.config import settings
from perkhub.core.exceptions import UnauthenticatedError, ValidationError
from perkhub.core.security import (
    check_password_policy,
    create_access_token,
    create_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

def test_password_hash_and_verify():
    pw = "S3cure!pass"
    hashed = get_password_hash(pw)
    assert hashed != pw
    assert verify_password(pw, hashed)
    assert not verify_password("wrong", hashed)

def test_create_access_token():
    token = create_access_token("user123")
    decoded = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert decoded["sub"] == "user123"
    assert decoded["type"] == "access"
    assert decoded["exp"] > decoded["iat"]

def test_tokens_for_same_user_are_distinct():
    assert create_access_token("user123") != create_access_token("user123")

def test_decode_access_token_roundtrip():
    assert decode_access_token(create_access_token("abc")) == "abc"

def test_decode_rejects_expired_token():
    token = create_access_token("abc", expires_delta=timedelta(seconds=-5))
    with pytest.raises(UnauthenticatedError) as exc:
        decode_access_token(token)
    assert exc.value.message == "Token has expired"

def test_decode_rejects_foreign_signature():
    token = jwt.encode({"sub": "abc", "type": "access", "exp": 9999999999}, "another-secret-key-of-decent-len", algorithm="HS256")
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)

def test_decode_rejects_wrong_token_type():
    token = create_token({"sub": "abc", "type": "refresh"}, timedelta(minutes=5))
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)

def test_decode_rejects_missing_subject():
    token = create_token({"type": "access"}, timedelta(minutes=5))
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)

@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_decode_rejects_malformed(token):
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)

@pytest.mark.parametrize("password", ["P@ssw0rd1", "abcdefg1", "패스워드pass1234"])
def test_password_policy_accepts(password):
    check_password_policy(password)

@pytest.mark.parametrize("password", ["short1", "onlyletters", "1234567890", "a1" * 40])
def test_password_policy_rejects(password):
    with pytest.raises(ValidationError):
        check_password_policy(password)

def test_password_policy_rejects_nul_character():
    with pytest.raises(ValidationError):
        check_password_policy("abc\x00defg1")

def test_verify_password_treats_nul_input_as_mismatch():
    hashed = get_password_hash("P@ssw0rd1")
    assert verify_password("abc\x00defg1", hashed) is False
