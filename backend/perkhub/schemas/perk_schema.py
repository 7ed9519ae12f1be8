# 혜택 요청/응답 스키마

from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, field_validator

class PerkCreate(BaseModel):
    title: str
    merchant: str
    description: Optional[str] = None
    category: Optional[str] = None
    discount: Optional[str] = None
    is_public: bool = True

    @field_validator("title", "merchant")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

class PerkPublic(BaseModel):
    id: str
    title: str
    merchant: str
    description: Optional[str] = None
    category: Optional[str] = None
    discount: Optional[str] = None
    is_public: bool = True
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_perk(cls, perk: Any) -> "PerkPublic":
        return cls(
            id=str(perk.id),
            title=perk.title,
            merchant=perk.merchant,
            description=perk.description,
            category=perk.category,
            discount=perk.discount,
            is_public=perk.is_public,
            owner_id=perk.owner_id,
            created_at=perk.created_at,
        )

class PerkListResponse(BaseModel):
    perks: List[PerkPublic]
    total: int
    shown: int
    summary: str

class PerkResponse(BaseModel):
    perk: PerkPublic

class PerkCollection(BaseModel):
    perks: List[PerkPublic]

class MerchantListResponse(BaseModel):
    merchants: List[str]
