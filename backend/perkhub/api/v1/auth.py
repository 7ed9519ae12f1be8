# 인증 라우터
# - 회원가입: POST /api/v1/auth/register (201)
# - 로그인: POST /api/v1/auth/login
# - 내 정보: GET /api/v1/auth/me (Bearer 토큰 필요)

from fastapi import APIRouter, Depends, status

from ...schemas.user_schema import UserCreate, UserLogin, AuthResponse, ProfileResponse
from ...services.auth_service import AuthService, get_auth_service
from ...core.security import get_bearer_token

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입 (이메일 중복 체크 포함, JWT 즉시 발급)",
)
async def register(payload: UserCreate, service: AuthService = Depends(get_auth_service)):
    return await service.register(payload.name, payload.email, payload.password)

@router.post("/login", response_model=AuthResponse, summary="로그인 (새 JWT 발급)")
async def login(payload: UserLogin, service: AuthService = Depends(get_auth_service)):
    return await service.login(payload.email, payload.password)

@router.get("/me", response_model=ProfileResponse, summary="현재 로그인한 사용자의 공개 프로필")
async def me(token: str = Depends(get_bearer_token), service: AuthService = Depends(get_auth_service)):
    return await service.get_profile(token)
