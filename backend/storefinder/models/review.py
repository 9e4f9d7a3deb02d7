# Review(리뷰) 도메인 모델
# - 작성자/스토어는 ObjectId 참조만 저장 (조인은 읽기 경로에서 명시적으로)
# - 평점은 1~5 정수

from datetime import datetime

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field


class Review(Document):
    created_date: datetime = Field(default_factory=datetime.utcnow)
    author: PydanticObjectId
    store: Indexed(PydanticObjectId)
    text: str
    rating: int = Field(..., ge=1, le=5)

    class Settings:
        name = "reviews"


class ReviewRating(BaseModel):
    """Top 스토어 집계용 projection"""
    store: PydanticObjectId
    rating: int
