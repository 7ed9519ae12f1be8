# Perk 도메인 모델 (Beanie Document)
# - 가맹점(merchant)이 제공하는 혜택
# - is_public=False인 혜택은 등록한 사용자에게만 보임

from datetime import datetime, timezone
from typing import Optional
from beanie import Document, Indexed
from pydantic import Field

class Perk(Document):
    title: str
    description: Optional[str] = None
    merchant: Indexed(str)
    category: Optional[str] = None
    discount: Optional[str] = None
    is_public: bool = True
    owner_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "perks"
