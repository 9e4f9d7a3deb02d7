# 샘플 데이터 적재 스크립트
# - python -m storefinder.scripts.load_sample_data          : users/stores/reviews 적재
# - python -m storefinder.scripts.load_sample_data --delete : 세 컬렉션 비우기
#
# 주니어 개발자님께: 샘플 users.json에는 평문 비밀번호가 들어 있고,
# 적재할 때 해시로 바꿔서 저장합니다. 운영 DB에는 절대 쓰지 마세요.

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, List

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from ..core.config import PACKAGE_ROOT, settings
from ..core.security import get_password_hash
from ..models.review import Review
from ..models.session import SessionRecord
from ..models.store import Store
from ..models.user import User

logger = logging.getLogger(__name__)

DATA_DIR = PACKAGE_ROOT / "data"


def read_json(name: str, data_dir: Path = DATA_DIR) -> List[Dict]:
    with open(data_dir / name, encoding="utf-8") as f:
        return json.load(f)


def user_documents(rows: List[Dict]) -> List[User]:
    users = []
    for row in rows:
        row = dict(row)
        password = row.pop("password")
        users.append(User(**row, hashed_password=get_password_hash(password)))
    return users


async def _init():
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    await init_beanie(database=client.get_default_database(), document_models=[User, Store, Review, SessionRecord])


async def load_data():
    await _init()
    users = user_documents(read_json("users.json"))
    stores = [Store(**row) for row in read_json("stores.json")]
    reviews = [Review(**row) for row in read_json("reviews.json")]
    await User.insert_many(users)
    await Store.insert_many(stores)
    await Review.insert_many(reviews)
    logger.info(f"[SampleData] 적재 완료: users={len(users)} stores={len(stores)} reviews={len(reviews)}")


async def delete_data():
    await _init()
    await Review.delete_all()
    await Store.delete_all()
    await User.delete_all()
    logger.info("[SampleData] users/stores/reviews 컬렉션을 비웠습니다")


def main(argv=None):
    parser = argparse.ArgumentParser(description="샘플 데이터 적재/삭제")
    parser.add_argument("--delete", action="store_true", help="샘플 대신 세 컬렉션을 비웁니다")
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(delete_data() if args.delete else load_data())


if __name__ == "__main__":
    main()
