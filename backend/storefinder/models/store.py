# Store(스토어) 도메인 모델
# - 이름/설명은 저장 전에 공백 제거
# - location은 GeoJSON Point + 주소
# - name/description 텍스트 인덱스, location 2dsphere 인덱스
# - slug는 서비스 레이어(slug_service)에서만 채워집니다

from datetime import datetime
from typing import List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field, field_validator
from pymongo import GEOSPHERE, TEXT, IndexModel


class Location(BaseModel):
    type: str = "Point"
    coordinates: List[float]  # [경도(lng), 위도(lat)] 순서 주의
    address: str

    @property
    def lng(self) -> float:
        return self.coordinates[0]

    @property
    def lat(self) -> float:
        return self.coordinates[1]


class Store(Document):
    name: str
    slug: Indexed(str) = ""
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=datetime.utcnow)
    location: Location
    photo: Optional[str] = None
    author: PydanticObjectId

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    class Settings:
        name = "stores"
        indexes = [
            IndexModel([("name", TEXT), ("description", TEXT)], name="store_text"),
            IndexModel([("location", GEOSPHERE)], name="store_location"),
        ]


class StorePin(BaseModel):
    """지도 API용 최소 필드 projection"""
    id: PydanticObjectId = Field(alias="_id")
    name: str
    slug: str
    description: Optional[str] = None
    location: Location
    photo: Optional[str] = None


class TaggedStore(BaseModel):
    """태그 집계용 projection"""
    tags: List[str] = Field(default_factory=list)


class StoreCard(BaseModel):
    """Top 스토어 집계용 projection"""
    id: PydanticObjectId = Field(alias="_id")
    name: str
    slug: str
    photo: Optional[str] = None
