# 보안/인증 유틸리티
# - 비밀번호 해싱/검증 (passlib bcrypt)
# - 비밀번호 재설정 토큰 발급/만료 판정
# - 현재 사용자 가져오기(의존성): 세션의 user_id -> User 문서로 복원

from datetime import datetime, timedelta
import secrets
from typing import Optional

from fastapi import Depends, Request
from passlib.context import CryptContext

from .constants import RESET_TOKEN_BYTES, RESET_TOKEN_TTL_SECONDS
from .exceptions import LoginRequired
from .session import Session
from ..models.user import User
from ..repositories.user_repository import UserRepository

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def generate_reset_token() -> str:
    return secrets.token_hex(RESET_TOKEN_BYTES)


def reset_token_expiry(now: Optional[datetime] = None) -> datetime:
    return (now or datetime.utcnow()) + timedelta(seconds=RESET_TOKEN_TTL_SECONDS)


def token_is_live(expires: Optional[datetime], now: Optional[datetime] = None) -> bool:
    return expires is not None and expires > (now or datetime.utcnow())


def get_session(request: Request) -> Session:
    return request.state.session


async def get_current_user(
    session: Session = Depends(get_session),
    repo: UserRepository = Depends(UserRepository),
) -> Optional[User]:
    # 익명 요청이면 None
    if not session.is_authenticated:
        return None
    return await repo.get(session.user_id)


async def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise LoginRequired()
    return user
