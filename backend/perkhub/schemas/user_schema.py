# 요청/응답 스키마 정의 (Pydantic 모델)
# - UserPublic은 비밀번호 해시 필드를 아예 갖지 않음 (응답에 섞일 수 없음)

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, field_validator

class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be empty")
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserPublic(BaseModel):
    id: str
    name: str
    email: EmailStr
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: Any) -> "UserPublic":
        # 필요한 필드만 하나씩 꺼냄
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            created_at=getattr(user, "created_at", None),
        )

class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserPublic

class ProfileResponse(BaseModel):
    user: UserPublic
