# 서버 측 세션
# - 쿠키에는 랜덤 sid만 저장, 로그인 사용자 ID/플래시 메시지는 MongoDB sessions 컬렉션에 저장
# - SessionMiddleware가 요청마다 세션을 로드해 request.state.session에 붙이고,
#   응답 직전에 변경 사항을 저장 + 쿠키를 갱신
# - 로그인/로그아웃 시 sid를 새로 발급 (세션 고정 공격 방지)

import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from markupsafe import Markup, escape
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .config import settings
from .constants import SESSION_REFRESH_SECONDS
from ..models.session import SessionRecord

logger = logging.getLogger(__name__)

# 정적 파일 요청에는 세션이 필요 없음
SKIP_PREFIXES = ("/static", "/uploads")


def new_sid() -> str:
    return secrets.token_urlsafe(32)


class Session:
    """요청 하나 동안 사용하는 세션 상태

    핸들러는 이 객체만 다루고, 저장은 SessionStore.commit()이 담당합니다.
    """

    def __init__(self, sid: str, user_id=None, flashes: Optional[Dict[str, List[str]]] = None,
                 is_new: bool = True, expires_at: Optional[datetime] = None):
        self.sid = sid
        self.user_id = user_id
        self.flashes: Dict[str, List[str]] = flashes or {}
        self.is_new = is_new
        self.expires_at = expires_at
        self.modified = False
        self.discarded_sid: Optional[str] = None

    def flash(self, category: str, message) -> None:
        # Markup으로 감싼 메시지만 HTML을 허용, 나머지는 이스케이프해서 저장
        safe = message if isinstance(message, Markup) else escape(message)
        self.flashes.setdefault(category, []).append(str(safe))
        self.modified = True

    def pop_flashes(self) -> Dict[str, List[str]]:
        if not self.flashes:
            return {}
        flashes, self.flashes = self.flashes, {}
        self.modified = True
        return flashes

    def regenerate(self) -> None:
        if not self.is_new and self.discarded_sid is None:
            self.discarded_sid = self.sid
        self.sid = new_sid()
        self.is_new = True
        self.user_id = None
        self.modified = True

    def login(self, user_id) -> None:
        self.regenerate()
        self.user_id = user_id

    def logout(self) -> None:
        self.regenerate()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def needs_refresh(self, max_age: int, now: Optional[datetime] = None) -> bool:
        """변경이 없어도 로그인 세션의 만료 시각을 연장해야 하는지 (마지막 갱신 후 하루 경과)"""
        if self.is_new or not self.is_authenticated or self.expires_at is None:
            return False
        now = now or datetime.utcnow()
        refreshed_at = self.expires_at - timedelta(seconds=max_age)
        return now - refreshed_at >= timedelta(seconds=SESSION_REFRESH_SECONDS)


class SessionStore:
    async def load(self, sid: Optional[str]) -> Session:
        if sid:
            record = await SessionRecord.find_one(SessionRecord.sid == sid)
            if record is not None and record.expires_at > datetime.utcnow():
                return Session(record.sid, record.user_id, record.flashes, is_new=False, expires_at=record.expires_at)
        return Session(new_sid())

    async def commit(self, session: Session, response: Response) -> None:
        if session.discarded_sid:
            logger.info("[Session] 세션 ID 재발급, 이전 세션 삭제")
            await SessionRecord.get_motor_collection().delete_one({"sid": session.discarded_sid})
        if not (session.modified or session.needs_refresh(settings.SESSION_MAX_AGE_SECONDS)):
            return
        expires_at = datetime.utcnow() + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
        await SessionRecord.get_motor_collection().update_one(
            {"sid": session.sid},
            {"$set": {"user_id": session.user_id, "flashes": session.flashes, "expires_at": expires_at}},
            upsert=True,
        )
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            session.sid,
            max_age=settings.SESSION_MAX_AGE_SECONDS,
            httponly=True,
            samesite="lax",
            secure=settings.SESSION_COOKIE_SECURE,
        )


class SessionMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, store: Optional[SessionStore] = None):
        super().__init__(app)
        self.store = store or SessionStore()

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(SKIP_PREFIXES):
            return await call_next(request)
        session = await self.store.load(request.cookies.get(settings.SESSION_COOKIE_NAME))
        request.state.session = session
        response = await call_next(request)
        await self.store.commit(session, response)
        return response
