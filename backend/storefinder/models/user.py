# User 도메인 모델 (Beanie Document)
# - 이메일, 이름, 비밀번호 해시, 재설정 토큰, 하트(즐겨찾기)한 스토어 목록
# - 이메일은 unique 인덱스, 소문자로 정규화

import hashlib
from datetime import datetime
from typing import List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import EmailStr, Field, field_validator


class User(Document):
    email: Indexed(EmailStr, unique=True)  # 중복 방지 인덱스
    name: str
    hashed_password: str = Field(repr=False)
    reset_password_token: Optional[str] = Field(None, repr=False)
    reset_password_expires: Optional[datetime] = None
    hearts: List[PydanticObjectId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @property
    def gravatar(self) -> str:
        digest = hashlib.md5(self.email.encode("utf-8")).hexdigest()
        return f"https://gravatar.com/avatar/{digest}?s=200"

    class Settings:
        name = "users"  # 컬렉션명
