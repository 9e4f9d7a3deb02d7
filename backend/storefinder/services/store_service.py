# 스토어 서비스 레이어
# - 생성/수정 (소유자 확인, 슬러그 할당, 사진 저장)
# - 목록 페이지네이션, 슬러그 조회(작성자/리뷰 명시적 조인)
# - 태그/Top 집계, 텍스트 검색, 위치 기반 검색, 하트 토글

import logging
import math
from typing import Dict, List, Optional

from beanie import PydanticObjectId
from fastapi import Depends, UploadFile

from . import aggregations, photo_service
from .slug_service import assign_slug
from ..core.constants import (
    NEAR_MAX_DISTANCE_METERS,
    NEAR_RESULT_LIMIT,
    SEARCH_RESULT_LIMIT,
    STORES_PER_PAGE,
)
from ..core.exceptions import NotStoreOwnerError, StoreNotFoundError
from ..core.forms import parse_form
from ..models.store import Location, Store, StorePin
from ..models.user import User
from ..repositories.review_repository import ReviewRepository
from ..repositories.store_repository import StoreRepository
from ..repositories.user_repository import UserRepository, to_object_id
from ..schemas.store_schema import SearchHit, StoreDetail, StoreForm, StorePage, TagCount, TopStore

logger = logging.getLogger(__name__)

STORE_MESSAGES = {
    "name": "Please enter a store name!",
    "address": "You must supply an address!",
    "lng": "You must supply coordinates!",
    "lat": "You must supply coordinates!",
}


def confirm_owner(store, user) -> None:
    if store.author != user.id:
        raise NotStoreOwnerError()


def last_page(count: int, per_page: int = STORES_PER_PAGE) -> int:
    return max(math.ceil(count / per_page), 1)


class StoreService:
    def __init__(self, stores: StoreRepository, users: UserRepository, reviews: ReviewRepository):
        self.stores = stores
        self.users = users
        self.reviews = reviews

    # ---- 생성/수정 ----

    async def create_store(self, values: Dict, photo: Optional[UploadFile], user: User) -> Store:
        form = parse_form(StoreForm, values, STORE_MESSAGES)
        filename = await photo_service.save_photo(photo, values)
        slug = await assign_slug(form.name, self.stores)
        store = await self.stores.create(
            name=form.name,
            slug=slug,
            description=form.description,
            tags=form.tags,
            location=Location(coordinates=[form.lng, form.lat], address=form.address),
            photo=filename,
            author=user.id,
        )
        logger.info(f"[StoreService] 스토어 생성: {store.slug} (author={user.id})")
        return store

    async def get_store_for_edit(self, store_id: str, user: User) -> Store:
        store = await self.stores.get(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        confirm_owner(store, user)
        return store

    async def update_store(self, store_id: str, values: Dict, photo: Optional[UploadFile], user: User) -> Store:
        store = await self.get_store_for_edit(store_id, user)
        form = parse_form(StoreForm, values, STORE_MESSAGES)
        filename = await photo_service.save_photo(photo, values)

        # 이름이 바뀐 경우에만 슬러그 재할당
        if form.name != store.name:
            store.slug = await assign_slug(form.name, self.stores, exclude_id=store.id)
        store.name = form.name
        store.description = form.description
        store.tags = form.tags
        store.location = Location(type="Point", coordinates=[form.lng, form.lat], address=form.address)
        if filename:
            store.photo = filename
        await self.stores.save(store)
        logger.info(f"[StoreService] 스토어 수정: {store.slug}")
        return store

    # ---- 조회 ----

    async def get_stores_page(self, page: int = 1) -> StorePage:
        """
        한 페이지(4개)의 스토어를 최신순으로 가져옵니다.

        주니어 개발자님께: 존재하지 않는 페이지를 요청하면 빈 목록 대신
        out_of_range=True와 마지막 페이지 번호를 돌려줍니다.
        라우터가 이 값을 보고 마지막 페이지로 리다이렉트합니다.
        """
        skip = (page - 1) * STORES_PER_PAGE
        stores = await self.stores.page(skip, STORES_PER_PAGE)
        count = await self.stores.count()
        pages = last_page(count)
        out_of_range = not stores and skip > 0
        return StorePage(stores=stores, page=page, pages=pages, count=count, out_of_range=out_of_range)

    async def get_store_by_slug(self, slug: str) -> StoreDetail:
        store = await self.stores.get_by_slug(slug)
        if store is None:
            raise StoreNotFoundError(slug)
        reviews = await self.reviews.for_store(store.id)
        # 작성자 조인: 스토어 작성자 + 리뷰 작성자를 한 번의 쿼리로
        author_ids = {store.author, *(r.author for r in reviews)}
        authors = {u.id: u for u in await self.users.by_ids(author_ids)}
        review_rows = [{"review": r, "author": authors.get(r.author)} for r in reviews]
        return StoreDetail(store=store, author=authors.get(store.author), reviews=review_rows)

    async def get_stores_by_tag(self, tag: Optional[str]) -> Dict:
        tags: List[TagCount] = aggregations.tag_counts(await self.stores.tag_rows())
        stores = await self.stores.by_tag(tag)
        return {"tags": tags, "stores": stores, "tag": tag}

    async def get_top_stores(self) -> List[TopStore]:
        return aggregations.top_rated(await self.stores.cards(), await self.reviews.ratings())

    async def search_stores(self, q: str) -> List[SearchHit]:
        if not q or not q.strip():
            return []
        rows = await self.stores.search(q, SEARCH_RESULT_LIMIT)
        return [
            SearchHit(
                id=str(r["_id"]),
                name=r["name"],
                slug=r.get("slug", ""),
                description=r.get("description"),
                score=float(r.get("score", 0.0)),
            )
            for r in rows
        ]

    async def stores_near(self, lng: float, lat: float) -> List[StorePin]:
        return await self.stores.near(lng, lat, NEAR_MAX_DISTANCE_METERS, NEAR_RESULT_LIMIT)

    # ---- 하트(즐겨찾기) ----

    async def toggle_heart(self, user: User, store_id: str) -> List[PydanticObjectId]:
        oid = to_object_id(store_id)
        if oid is None or await self.stores.get(oid) is None:
            raise StoreNotFoundError(store_id)
        remove = oid in user.hearts
        updated = await self.users.toggle_heart(user.id, oid, remove=remove)
        return updated.hearts

    async def get_hearted_stores(self, user: User) -> List[Store]:
        if not user.hearts:
            return []
        return await self.stores.by_ids(user.hearts)


def get_store_service(
    stores: StoreRepository = Depends(StoreRepository),
    users: UserRepository = Depends(UserRepository),
    reviews: ReviewRepository = Depends(ReviewRepository),
) -> StoreService:
    return StoreService(stores, users, reviews)
