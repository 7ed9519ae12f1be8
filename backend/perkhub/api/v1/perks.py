# 혜택 라우터
# - GET  /api/v1/perks            : 공개 혜택 목록 (?name=, ?merchant= 필터), 인증 불필요
# - GET  /api/v1/perks/merchants  : 가맹점 목록, 인증 불필요
# - GET  /api/v1/perks/mine       : 내가 등록한 혜택 (로그인 필요)
# - GET  /api/v1/perks/{perk_id}  : 혜택 상세 (비공개는 본인만)
# - POST /api/v1/perks            : 혜택 등록 (로그인 필요)
#
# 주의: /merchants, /mine은 /{perk_id}보다 먼저 선언해야 경로가 겹치지 않습니다.

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status

from ...core.security import get_current_user, get_optional_user
from ...models.user import User
from ...schemas.perk_schema import (
    MerchantListResponse,
    PerkCollection,
    PerkCreate,
    PerkListResponse,
    PerkPublic,
    PerkResponse,
)
from ...services.perk_service import PerkService, get_perk_service

router = APIRouter(prefix="/perks", tags=["perks"])

@router.get("", response_model=PerkListResponse, summary="공개 혜택 목록 + 이름/가맹점 필터")
async def list_perks(
    name: Union[str, None] = Query(default=None, description="제목 부분 일치 (대소문자 무시)"),
    merchant: Union[str, None] = Query(default=None, description="가맹점 정확히 일치 ('all'이면 전체)"),
    service: PerkService = Depends(get_perk_service),
):
    listing = await service.list_public(name=name, merchant=merchant)
    return PerkListResponse(
        perks=[PerkPublic.from_perk(p) for p in listing.perks],
        total=listing.total,
        shown=listing.shown,
        summary=listing.summary,
    )

@router.get("/merchants", response_model=MerchantListResponse, summary="가맹점 목록")
async def merchants(service: PerkService = Depends(get_perk_service)):
    return MerchantListResponse(merchants=await service.merchants())

@router.get("/mine", response_model=PerkCollection, summary="내가 등록한 혜택 (로그인 필요)")
async def my_perks(user: User = Depends(get_current_user), service: PerkService = Depends(get_perk_service)):
    perks = await service.list_mine(str(user.id))
    return PerkCollection(perks=[PerkPublic.from_perk(p) for p in perks])

@router.get("/{perk_id}", response_model=PerkResponse, summary="혜택 상세")
async def get_perk(
    perk_id: str,
    viewer: Optional[User] = Depends(get_optional_user),
    service: PerkService = Depends(get_perk_service),
):
    perk = await service.get(perk_id, viewer_id=str(viewer.id) if viewer else None)
    return PerkResponse(perk=PerkPublic.from_perk(perk))

@router.post("", response_model=PerkResponse, status_code=status.HTTP_201_CREATED, summary="혜택 등록 (로그인 필요)")
async def create_perk(
    payload: PerkCreate,
    user: User = Depends(get_current_user),
    service: PerkService = Depends(get_perk_service),
):
    perk = await service.create(str(user.id), payload)
    return PerkResponse(perk=PerkPublic.from_perk(perk))
