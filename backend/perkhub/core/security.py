# 보안/인증 유틸리티
# - 비밀번호 해싱/검증, 비밀번호 정책
# - JWT 토큰 생성/검증
# - 현재 사용자 가져오기(의존성)

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
import jwt

from .config import settings
from .exceptions import UnauthenticatedError, ValidationError
from ..models.user import User
from ..repositories.user_repository import UserRepository

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error=False: 헤더가 없을 때 FastAPI 기본 403 대신 우리 401 에러를 쓰기 위함
bearer_scheme = HTTPBearer(auto_error=False)

BCRYPT_MAX_BYTES = 72
TOKEN_TYPE_ACCESS = "access"

# 존재하지 않는 이메일로 로그인할 때도 bcrypt 검증 시간을 똑같이 쓰기 위한 더미 해시
_DUMMY_HASH = pwd_context.hash("perkhub-timing-equalizer")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # passlib은 bcrypt가 받을 수 없는 입력(NUL 바이트 등)에 PasswordValueError를 던짐
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def burn_password_check(plain_password: str) -> None:
    # 결과는 버림. 응답 시간으로 계정 존재 여부가 드러나지 않게 한다.
    verify_password(plain_password, _DUMMY_HASH)

def check_password_policy(password: str) -> None:
    """비밀번호 정책 검사. 위반 시 ValidationError.

    - 최소 길이: settings.PASSWORD_MIN_LENGTH
    - 최대 길이: UTF-8 72바이트 (bcrypt는 그 이후를 잘라버림)
    - 영문자 1개 이상, 숫자 1개 이상
    - NUL 문자 금지 (bcrypt가 거부함)
    """
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long")
    if "\x00" in password:
        raise ValidationError("Password must not contain NUL characters")
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        raise ValidationError("Password must contain at least one letter and one digit")

def create_token(subject: dict, expires_delta: timedelta) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        # 같은 초에 발급된 토큰끼리도 서로 달라야 함
        "jti": uuid.uuid4().hex,
        **subject,
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token

def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return create_token({"sub": str(user_id), "type": TOKEN_TYPE_ACCESS}, expires_delta)

def decode_access_token(token: str) -> str:
    """토큰을 검증하고 subject(사용자 id)를 반환합니다. 실패하면 UnauthenticatedError."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Token has expired")
    except jwt.PyJWTError:
        raise UnauthenticatedError()

    if payload.get("type") != TOKEN_TYPE_ACCESS:
        raise UnauthenticatedError()
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError()
    return user_id

def get_bearer_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    # HTTPBearer(auto_error=False)는 헤더가 없거나 scheme이 Bearer가 아니면 None을 돌려줌
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Missing bearer token")
    return credentials.credentials

async def get_current_user(
    token: str = Depends(get_bearer_token),
    repo: UserRepository = Depends(UserRepository),
) -> User:
    user_id = decode_access_token(token)
    user = await repo.get(user_id)
    if not user:
        raise UnauthenticatedError()
    return user

async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repo: UserRepository = Depends(UserRepository),
) -> Optional[User]:
    # 헤더가 없으면 익명, 있으면 get_current_user와 똑같이 검증
    if credentials is None or not credentials.credentials:
        return None
    return await get_current_user(credentials.credentials, repo)
