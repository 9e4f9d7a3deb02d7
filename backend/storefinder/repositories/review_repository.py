# 리뷰 저장소 레이어

from typing import Dict, List

from beanie import PydanticObjectId
from pymongo import DESCENDING

from ..models.review import Review, ReviewRating


class ReviewRepository:
    async def create(self, author: PydanticObjectId, store: PydanticObjectId, text: str, rating: int) -> Review:
        review = Review(author=author, store=store, text=text, rating=rating)
        return await review.insert()

    async def for_store(self, store_id: PydanticObjectId) -> List[Review]:
        return await Review.find(Review.store == store_id).sort((Review.created_date, DESCENDING)).to_list()

    async def ratings(self) -> List[Dict]:
        rows = await Review.find_all().project(ReviewRating).to_list()
        return [{"store": str(r.store), "rating": r.rating} for r in rows]
