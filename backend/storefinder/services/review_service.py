# 리뷰 서비스 레이어
# - 입력 검증 (본문 필수, 평점 1~5)
# - 대상 스토어 존재 확인 후 저장
# - 한 사용자가 같은 스토어에 여러 번 리뷰하는 것은 허용

import logging
from typing import Dict

from fastapi import Depends

from ..core.exceptions import StoreNotFoundError
from ..core.forms import parse_form
from ..models.review import Review
from ..models.user import User
from ..repositories.review_repository import ReviewRepository
from ..repositories.store_repository import StoreRepository
from ..schemas.review_schema import ReviewForm

logger = logging.getLogger(__name__)

REVIEW_MESSAGES = {
    "text": "Your review must have text!",
    "rating": "You must include a rating between 1 and 5!",
}


class ReviewService:
    def __init__(self, reviews: ReviewRepository, stores: StoreRepository):
        self.reviews = reviews
        self.stores = stores

    async def add_review(self, store_id: str, values: Dict, user: User) -> Review:
        form = parse_form(ReviewForm, values, REVIEW_MESSAGES)
        store = await self.stores.get(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        review = await self.reviews.create(author=user.id, store=store.id, text=form.text, rating=form.rating)
        logger.info(f"[ReviewService] 리뷰 저장: store={store.slug} rating={form.rating}")
        return review


def get_review_service(
    reviews: ReviewRepository = Depends(ReviewRepository),
    stores: StoreRepository = Depends(StoreRepository),
) -> ReviewService:
    return ReviewService(reviews, stores)
