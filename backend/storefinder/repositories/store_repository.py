# 스토어 저장소 레이어
# - Beanie 쿼리만 담당, 정렬/필터 규칙은 인자로 받음
# - 텍스트 검색 점수($meta)는 Beanie 정렬 API로 표현이 안 되어 motor 컬렉션을 직접 사용

from typing import Dict, Iterable, List, Optional

from beanie import PydanticObjectId
from beanie.operators import In
from pymongo import DESCENDING

from ..models.store import Store, StoreCard, StorePin, TaggedStore
from .user_repository import to_object_id


class StoreRepository:
    async def get(self, store_id) -> Optional[Store]:
        oid = to_object_id(store_id)
        if oid is None:
            return None
        return await Store.get(oid)

    async def get_by_slug(self, slug: str) -> Optional[Store]:
        return await Store.find_one(Store.slug == slug)

    async def count_slug_matches(self, pattern: str, exclude_id: Optional[PydanticObjectId] = None) -> int:
        query: Dict = {"slug": {"$regex": pattern, "$options": "i"}}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return await Store.find(query).count()

    async def create(self, **fields) -> Store:
        return await Store(**fields).insert()

    async def save(self, store: Store) -> Store:
        await store.save()
        return store

    async def count(self) -> int:
        return await Store.find_all().count()

    async def page(self, skip: int, limit: int) -> List[Store]:
        return await Store.find_all().sort((Store.created, DESCENDING)).skip(skip).limit(limit).to_list()

    async def by_ids(self, ids: Iterable[PydanticObjectId]) -> List[Store]:
        return await Store.find(In(Store.id, list(ids))).to_list()

    async def by_tag(self, tag: Optional[str]) -> List[Store]:
        # 태그가 없으면 tags 필드가 있는 모든 스토어
        query = {"tags": tag} if tag else {"tags": {"$exists": True}}
        return await Store.find(query).to_list()

    async def tag_rows(self) -> List[Dict]:
        rows = await Store.find_all().project(TaggedStore).to_list()
        return [r.model_dump() for r in rows]

    async def cards(self) -> List[Dict]:
        rows = await Store.find_all().project(StoreCard).to_list()
        return [{"_id": str(r.id), "name": r.name, "slug": r.slug, "photo": r.photo} for r in rows]

    async def search(self, q: str, limit: int) -> List[Dict]:
        cursor = (
            Store.get_motor_collection()
            .find({"$text": {"$search": q}}, {"name": 1, "slug": 1, "description": 1, "score": {"$meta": "textScore"}})
            .sort([("score", {"$meta": "textScore"})])
            .limit(limit)
        )
        return await cursor.to_list(length=limit)

    async def near(self, lng: float, lat: float, max_distance: int, limit: int) -> List[StorePin]:
        query = {
            "location": {
                "$near": {
                    "$geometry": {"type": "Point", "coordinates": [lng, lat]},
                    "$maxDistance": max_distance,
                }
            }
        }
        return await Store.find(query).project(StorePin).limit(limit).to_list()
