# 혜택 저장소 레이어

from typing import List, Optional
from beanie import PydanticObjectId
from bson.errors import InvalidId
from ..models.perk import Perk


class PerkRepository:
    async def list_public(self) -> List[Perk]:
        return await Perk.find(Perk.is_public == True).sort(-Perk.created_at).to_list()  # noqa: E712

    async def list_by_owner(self, owner_id: str) -> List[Perk]:
        return await Perk.find(Perk.owner_id == owner_id).sort(-Perk.created_at).to_list()

    async def create(self, owner_id: str, **fields) -> Perk:
        perk = Perk(owner_id=owner_id, **fields)
        return await perk.insert()

    async def get(self, perk_id: str) -> Optional[Perk]:
        try:
            oid = PydanticObjectId(perk_id)
        except (InvalidId, TypeError):
            return None
        return await Perk.get(oid)
