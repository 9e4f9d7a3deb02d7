# 사용자 저장소 레이어
# - 데이터 접근(조회/생성/갱신)만 담당 (서비스 로직 분리)

from datetime import datetime
from typing import Iterable, List, Optional

from beanie import PydanticObjectId
from beanie.operators import In
from bson.errors import InvalidId
from pydantic import EmailStr

from ..models.user import User


def to_object_id(value) -> Optional[PydanticObjectId]:
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        return None


class UserRepository:
    async def get_by_email(self, email: EmailStr) -> Optional[User]:
        return await User.find_one(User.email == email.strip().lower())

    async def create(self, name: str, email: EmailStr, hashed_password: str) -> User:
        user = User(name=name, email=email, hashed_password=hashed_password)
        return await user.insert()

    async def get(self, user_id) -> Optional[User]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await User.get(oid)

    async def by_ids(self, ids: Iterable[PydanticObjectId]) -> List[User]:
        return await User.find(In(User.id, list(ids))).to_list()

    async def get_by_reset_token(self, token: str) -> Optional[User]:
        return await User.find_one(User.reset_password_token == token)

    async def set_reset_token(self, user: User, token: str, expires: datetime) -> User:
        user.reset_password_token = token
        user.reset_password_expires = expires
        await user.save()
        return user

    async def set_password(self, user: User, hashed_password: str) -> User:
        # 비밀번호 교체와 동시에 재설정 토큰을 비움 (토큰 1회성)
        user.hashed_password = hashed_password
        user.reset_password_token = None
        user.reset_password_expires = None
        await user.save()
        return user

    async def update_account(self, user: User, name: str, email: EmailStr) -> User:
        user.name = name
        user.email = email
        await user.save()
        return user

    async def toggle_heart(self, user_id, store_id: PydanticObjectId, remove: bool) -> Optional[User]:
        operator = "$pull" if remove else "$addToSet"
        await User.find_one(User.id == user_id).update({operator: {"hearts": store_id}})
        return await User.get(user_id)
