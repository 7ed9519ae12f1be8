# User 도메인 모델 (Beanie Document)
# - 표시 이름, 이메일(소문자 정규화), 비밀번호 해시, 생성일
# - 이메일은 unique 인덱스

from datetime import datetime, timezone
from beanie import Document, Indexed
from pydantic import EmailStr, Field

class User(Document):
    name: str
    email: Indexed(EmailStr, unique=True)  # 중복 방지 인덱스 (동시 가입도 여기서 막힘)
    hashed_password: str = Field(repr=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "users"  # 컬렉션명
