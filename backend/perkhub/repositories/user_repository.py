# 사용자 저장소 레이어
# - 데이터 접근(조회/생성)만 담당 (서비스 로직 분리)
# - 이메일은 항상 소문자로 정규화해서 저장/조회

from typing import Optional
from beanie import PydanticObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError
from ..core.exceptions import DuplicateAccountError
from ..models.user import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    async def get_by_email(self, email: str) -> Optional[User]:
        return await User.find_one(User.email == normalize_email(email))

    async def create(self, name: str, email: str, hashed_password: str) -> User:
        user = User(name=name, email=normalize_email(email), hashed_password=hashed_password)
        try:
            return await user.insert()
        except DuplicateKeyError:
            # 동시에 같은 이메일로 가입한 경우: unique 인덱스가 하나만 통과시킴
            raise DuplicateAccountError()

    async def get(self, user_id: str) -> Optional[User]:
        try:
            oid = PydanticObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        return await User.get(oid)
