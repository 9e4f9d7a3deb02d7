# 스토어 관련 폼/응답 스키마

from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.slug_service import base_slug


class StoreForm(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    address: str = Field(..., min_length=1)
    lng: float = Field(..., ge=-180, le=180)
    lat: float = Field(..., ge=-90, le=90)

    @field_validator("name", "address", mode="before")
    @classmethod
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def name_has_slug(cls, v: str) -> str:
        # 기호로만 된 이름은 슬러그가 빈 문자열이 되어 상세 페이지에 접근할 수 없음
        if not base_slug(v):
            raise ValueError("name must contain letters or digits")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class SearchHit(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    score: float


class TagCount(BaseModel):
    tag: str
    count: int


class TopStore(BaseModel):
    id: str
    name: str
    slug: str
    photo: Optional[str] = None
    averageRating: float
    reviewCount: int


@dataclass
class StorePage:
    stores: List[Any]
    page: int
    pages: int
    count: int
    out_of_range: bool = False


@dataclass
class StoreDetail:
    """스토어 + 작성자 + 리뷰(각 리뷰의 작성자 포함)를 명시적으로 조인한 결과"""
    store: Any
    author: Any
    reviews: List[Any] = field(default_factory=list)
