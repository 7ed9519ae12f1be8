# 혜택 디렉토리 서비스 레이어
# - 공개 혜택 목록 + 이름/가맹점 필터 + "Showing N of M perks" 요약
# - 가맹점 목록 (드롭다운용)
# - 로그인 사용자의 혜택 등록/조회

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from fastapi import Depends

from ..core.exceptions import PerkNotFoundError
from ..repositories.perk_repository import PerkRepository
from ..schemas.perk_schema import PerkCreate

logger = logging.getLogger(__name__)

# 가맹점 드롭다운의 "전체" 값
ALL_MERCHANTS = "all"


def filter_perks(perks: Iterable, name: Optional[str] = None, merchant: Optional[str] = None) -> list:
    """두 조건을 AND로 적용해 혜택을 거릅니다. 입력 순서는 유지됩니다.

    - name: 제목에 대소문자 구분 없이 포함되는지 (빈 값이면 조건 없음)
    - merchant: 가맹점이 정확히 같은지 (빈 값이나 "all"이면 조건 없음)
    """
    needle = (name or "").strip().lower()
    wanted = (merchant or "").strip()
    if wanted.lower() == ALL_MERCHANTS:
        wanted = ""

    result = []
    for perk in perks:
        if needle and needle not in perk.title.lower():
            continue
        if wanted and perk.merchant != wanted:
            continue
        result.append(perk)
    return result


def list_merchants(perks: Iterable) -> List[str]:
    merchants = {p.merchant.strip() for p in perks if p.merchant and p.merchant.strip()}
    return sorted(merchants, key=lambda m: (m.lower(), m))


def summarize(shown: int, total: int) -> str:
    return f"Showing {shown} of {total} perks"


@dataclass
class PerkListing:
    perks: Sequence
    total: int
    shown: int
    summary: str


class PerkService:
    def __init__(self, repo: PerkRepository):
        self.repo = repo

    async def list_public(self, name: Optional[str] = None, merchant: Optional[str] = None) -> PerkListing:
        perks = await self.repo.list_public()
        shown = filter_perks(perks, name=name, merchant=merchant)
        return PerkListing(perks=shown, total=len(perks), shown=len(shown), summary=summarize(len(shown), len(perks)))

    async def merchants(self) -> List[str]:
        return list_merchants(await self.repo.list_public())

    async def list_mine(self, owner_id: str) -> list:
        return await self.repo.list_by_owner(owner_id)

    async def create(self, owner_id: str, payload: PerkCreate):
        perk = await self.repo.create(owner_id, **payload.model_dump())
        logger.info("Perk id=%s created by user id=%s", perk.id, owner_id)
        return perk

    async def get(self, perk_id: str, viewer_id: Optional[str] = None):
        perk = await self.repo.get(perk_id)
        if not perk:
            raise PerkNotFoundError()
        # 비공개 혜택은 존재 자체를 숨김
        if not perk.is_public and perk.owner_id != viewer_id:
            raise PerkNotFoundError()
        return perk


def get_perk_service(repo: PerkRepository = Depends(PerkRepository)) -> PerkService:
    return PerkService(repo)
