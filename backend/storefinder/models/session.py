# 서버 측 세션 레코드
# - 쿠키에는 sid만, 로그인 사용자 ID와 플래시 메시지는 여기 저장
# - expires_at TTL 인덱스로 MongoDB가 만료된 세션을 자동 삭제

from datetime import datetime
from typing import Dict, List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field
from pymongo import ASCENDING, IndexModel


class SessionRecord(Document):
    sid: Indexed(str, unique=True)
    user_id: Optional[PydanticObjectId] = None
    flashes: Dict[str, List[str]] = Field(default_factory=dict)
    expires_at: datetime

    class Settings:
        name = "sessions"
        indexes = [
            IndexModel([("expires_at", ASCENDING)], expireAfterSeconds=0, name="session_ttl"),
        ]
