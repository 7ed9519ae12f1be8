# 테스트 공용 픽스처
# - MongoDB 없이 돌리기 위해 저장소를 메모리 구현으로 바꿔 끼움 (dependency_overrides)
# - JWT_SECRET_KEY는 settings가 import되기 전에 넣어야 함

import asyncio
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

os.environ.setdefault("JWT_SECRET_KEY", "tests-only-secret-key-with-enough-length-000")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from perkhub.core.exceptions import DuplicateAccountError
from perkhub.main import app
from perkhub.repositories.perk_repository import PerkRepository
from perkhub.repositories.user_repository import UserRepository, normalize_email


def _now():
    return datetime.now(timezone.utc)


@dataclass
class FakeUser:
    id: str
    name: str
    email: str
    hashed_password: str
    created_at: datetime = field(default_factory=_now)


@dataclass
class FakePerk:
    id: str
    title: str
    merchant: str
    description: Optional[str] = None
    category: Optional[str] = None
    discount: Optional[str] = None
    is_public: bool = True
    owner_id: Optional[str] = None
    created_at: datetime = field(default_factory=_now)


class InMemoryUserRepository:
    def __init__(self):
        self.users: Dict[str, FakeUser] = {}
        self._lock = asyncio.Lock()

    async def get_by_email(self, email: str) -> Optional[FakeUser]:
        email = normalize_email(email)
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, name: str, email: str, hashed_password: str) -> FakeUser:
        async with self._lock:
            email = normalize_email(email)
            if any(u.email == email for u in self.users.values()):
                raise DuplicateAccountError()
            user = FakeUser(id=str(ObjectId()), name=name, email=email, hashed_password=hashed_password)
            self.users[user.id] = user
            return user

    async def get(self, user_id: str) -> Optional[FakeUser]:
        return self.users.get(user_id)

    def delete(self, user_id: str) -> None:
        self.users.pop(user_id, None)


class InMemoryPerkRepository:
    def __init__(self):
        self.perks: List[FakePerk] = []

    def seed(self, **fields) -> FakePerk:
        perk = FakePerk(id=str(ObjectId()), **fields)
        self.perks.append(perk)
        return perk

    async def list_public(self) -> List[FakePerk]:
        return [p for p in self.perks if p.is_public]

    async def list_by_owner(self, owner_id: str) -> List[FakePerk]:
        return [p for p in self.perks if p.owner_id == owner_id]

    async def create(self, owner_id: str, **fields) -> FakePerk:
        return self.seed(owner_id=owner_id, **fields)

    async def get(self, perk_id: str) -> Optional[FakePerk]:
        return next((p for p in self.perks if p.id == perk_id), None)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def perk_repo():
    return InMemoryPerkRepository()


@pytest.fixture
def client(user_repo, perk_repo):
    app.dependency_overrides[UserRepository] = lambda: user_repo
    app.dependency_overrides[PerkRepository] = lambda: perk_repo
    # with 블록 없이 생성: startup(MongoDB 연결)을 돌리지 않음
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def credentials():
    return {"name": "Test Runner", "email": "T@Example.com", "password": "P@ssw0rd1"}
