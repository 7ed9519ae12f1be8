# 인증 서비스 레이어
# - 회원가입 (이메일 중복 체크, 비밀번호 정책, 해시 저장, JWT 발급)
# - 로그인 (비밀번호 검증, 새 JWT 발급)
# - 프로필 조회 (토큰 검증 후 공개 필드만 반환)

import logging
from typing import Tuple

from fastapi import Depends
from ..repositories.user_repository import UserRepository, normalize_email
from ..core.exceptions import DuplicateAccountError, InvalidCredentialsError, UnauthenticatedError
from ..core.security import (
    burn_password_check,
    check_password_policy,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from ..schemas.user_schema import AuthResponse, ProfileResponse, UserPublic

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        email = normalize_email(email)
        check_password_policy(password)
        existing = await self.repo.get_by_email(email)
        if existing:
            raise DuplicateAccountError()
        hashed = get_password_hash(password)
        # 사전 체크를 통과해도 동시 가입이면 저장소에서 DuplicateAccountError가 남
        user = await self.repo.create(name, email, hashed)
        logger.info("Registered user id=%s", user.id)
        return self._issue(user)

    async def login(self, email: str, password: str) -> AuthResponse:
        user = await self.repo.get_by_email(normalize_email(email))
        if not user:
            burn_password_check(password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not verify_password(password, user.hashed_password):
            logger.info("Login failed: wrong password for user id=%s", user.id)
            raise InvalidCredentialsError()
        return self._issue(user)

    async def get_profile(self, token: str) -> ProfileResponse:
        user_id = decode_access_token(token)
        user = await self.repo.get(user_id)
        if not user:
            raise UnauthenticatedError()
        return ProfileResponse(user=UserPublic.from_user(user))

    @staticmethod
    def _issue(user) -> AuthResponse:
        token = create_access_token(str(user.id))
        return AuthResponse(token=token, user=UserPublic.from_user(user))


def get_auth_service(repo: UserRepository = Depends(UserRepository)) -> AuthService:
    return AuthService(repo)
