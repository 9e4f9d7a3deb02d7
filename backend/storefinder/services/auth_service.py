# 인증 서비스 레이어
# - 회원가입 (입력 검증, 이메일 중복 체크)
# - 로그인 (비밀번호 검증)
# - 비밀번호 재설정 (토큰 발급 + 메일 발송, 토큰 소비)
# - 계정 정보 수정

import logging
from typing import Callable, Dict

from fastapi import Depends
from pymongo.errors import DuplicateKeyError

from . import mail_service
from ..core.exceptions import AccountNotFound, AuthenticationError, FormValidationError, InvalidResetToken
from ..core.forms import parse_form
from ..core.security import (
    generate_reset_token,
    get_password_hash,
    reset_token_expiry,
    token_is_live,
    verify_password,
)
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user_schema import AccountForm, RegisterForm

logger = logging.getLogger(__name__)

REGISTER_MESSAGES = {
    "name": "You must supply a name!",
    "email": "That Email is not valid!",
    "password": "Password Cannot be Blank!",
    "password_confirm": "Confirmed Password cannot be blank!",
}

ACCOUNT_MESSAGES = {
    "name": "You must supply a name!",
    "email": "That Email is not valid!",
}

DUPLICATE_EMAIL = "A user with the given email is already registered"


class AuthService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def register(self, values: Dict) -> User:
        form = parse_form(RegisterForm, values, REGISTER_MESSAGES)
        existing = await self.repo.get_by_email(form.email)
        if existing:
            raise FormValidationError([DUPLICATE_EMAIL], values)
        hashed = get_password_hash(form.password)
        try:
            user = await self.repo.create(form.name, form.email, hashed)
        except DuplicateKeyError:
            # 중복 체크와 insert 사이에 같은 이메일이 먼저 들어온 경우
            raise FormValidationError([DUPLICATE_EMAIL], values)
        logger.info(f"[AuthService] 회원가입: {user.email}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        user = await self.repo.get_by_email(email or "")
        if not user or not verify_password(password or "", user.hashed_password):
            raise AuthenticationError()
        return user

    async def forgot(self, email: str, reset_url_for: Callable[[str], str]) -> User:
        """
        재설정 토큰(1시간 유효)을 발급하고 재설정 링크를 메일로 보냅니다.

        Args:
            email: 사용자가 입력한 이메일
            reset_url_for: 토큰 -> 절대 URL 변환 함수 (라우터가 request.url_for로 만들어 넘김)
        """
        user = await self.repo.get_by_email(email or "")
        if not user:
            raise AccountNotFound()
        token = generate_reset_token()
        await self.repo.set_reset_token(user, token, reset_token_expiry())
        await mail_service.send(user, "Password Reset", "password_reset", reset_url=reset_url_for(token))
        return user

    async def get_reset_user(self, token: str) -> User:
        # 토큰 불일치와 만료를 같은 예외로 처리
        user = await self.repo.get_by_reset_token(token)
        if user is None or not token_is_live(user.reset_password_expires):
            raise InvalidResetToken()
        return user

    async def reset_password(self, token: str, password: str, password_confirm: str) -> User:
        if not password or password != password_confirm:
            raise FormValidationError(["Passwords do not match!"])
        user = await self.get_reset_user(token)
        user = await self.repo.set_password(user, get_password_hash(password))
        logger.info(f"[AuthService] 비밀번호 재설정 완료: {user.email}")
        return user

    async def update_account(self, user: User, values: Dict) -> User:
        form = parse_form(AccountForm, values, ACCOUNT_MESSAGES)
        if form.email != user.email:
            other = await self.repo.get_by_email(form.email)
            if other is not None:
                raise FormValidationError([DUPLICATE_EMAIL], values)
        return await self.repo.update_account(user, form.name, form.email)


def get_auth_service(repo: UserRepository = Depends(UserRepository)) -> AuthService:
    return AuthService(repo)
